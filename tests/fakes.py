from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from werkzeug.security import generate_password_hash

from workforce_portal.attendance.model import AttendanceRecord, BiometricCapabilities, VerificationResult
from workforce_portal.company.model import Company
from workforce_portal.core.enums import ClockMethod, Role
from workforce_portal.users.model import User

OWNER_ID = 1
EMPLOYEE_ID = 2
NEW_OWNER_ID = 3
COMPANY_ID = 10


class InMemoryUsers:
    def __init__(self, users: Optional[list[User]] = None):
        self.by_id: dict[int, User] = {u.user_id: u for u in (users or [])}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def create_user(self, *, email, password_hash, first_name, last_name, role, company_id) -> int:
        user_id = max(self.by_id, default=0) + 1
        self.by_id[user_id] = User(
            user_id=user_id,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
            company_id=company_id,
        )
        return user_id

    def set_company(self, user_id: int, *, company_id: int) -> bool:
        self.by_id[user_id] = replace(self.by_id[user_id], company_id=company_id)
        return True

    def mark_onboarding_completed(self, user_id: int) -> bool:
        self.by_id[user_id] = replace(self.by_id[user_id], onboarding_completed=True)
        return True


class InMemoryCompanies:
    def __init__(self, companies: Optional[list[Company]] = None):
        self.by_id: dict[int, Company] = {c.company_id: c for c in (companies or [])}

    def get_by_id(self, company_id: int) -> Optional[Company]:
        return self.by_id.get(company_id)

    def create(self, *, name: str) -> int:
        company_id = max(self.by_id, default=0) + 1
        self.by_id[company_id] = Company(company_id=company_id, name=name)
        return company_id

    def update_name(self, company_id: int, *, name: str) -> bool:
        self.by_id[company_id] = replace(self.by_id[company_id], name=name)
        return True

    def set_biometrics_required(self, company_id: int, *, required: bool) -> bool:
        self.by_id[company_id] = replace(self.by_id[company_id], biometrics_required=required)
        return True

    def set_logo_url(self, company_id: int, *, logo_url: str) -> bool:
        self.by_id[company_id] = replace(self.by_id[company_id], logo_url=logo_url)
        return True


class InMemoryAttendance:
    def __init__(self):
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def get_recent_for_user(self, user_id: int, limit: int):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.clock_in_time, reverse=True)
        return items[:limit]

    def create_clock_in(self, *, user_id: int, work_date: date, clock_in_time: datetime, method: ClockMethod) -> int:
        self._id += 1
        self._by_user_date[(user_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            work_date=work_date,
            clock_in_time=clock_in_time,
            clock_out_time=None,
            method=method,
        )
        return self._id

    def update_clock_out(self, *, attendance_id: int, clock_out_time: datetime) -> bool:
        for key, rec in self._by_user_date.items():
            if rec.attendance_id == attendance_id and rec.clock_out_time is None:
                self._by_user_date[key] = replace(rec, clock_out_time=clock_out_time)
                return True
        return False


class FakeVerifier:
    def __init__(self, *, has_hardware=True, is_enrolled=True, results=None):
        self.capabilities = BiometricCapabilities(has_hardware=has_hardware, is_enrolled=is_enrolled)
        self.results = list(results or [VerificationResult(success=True)])
        self.prompts: list[str] = []

    def check_hardware_and_enrollment(self) -> BiometricCapabilities:
        return self.capabilities

    def authenticate(self, prompt_message: str) -> VerificationResult:
        self.prompts.append(prompt_message)
        return self.results.pop(0) if len(self.results) > 1 else self.results[0]


def make_user(user_id, email, role, *, company_id=COMPANY_ID, onboarding_completed=True, password="secret123"):
    return User(
        user_id=user_id,
        email=email,
        password_hash=generate_password_hash(password),
        first_name=email.split("@")[0].capitalize(),
        last_name="Demo",
        role=role,
        company_id=company_id,
        onboarding_completed=onboarding_completed,
    )
