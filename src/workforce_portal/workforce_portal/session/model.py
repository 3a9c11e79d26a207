from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class SessionUser:
    """The signed-in user as the session sees it (no credentials)."""

    user_id: int
    email: str
    first_name: str
    last_name: str
    role: Role
    company_id: Optional[int]
    onboarding_completed: bool
    email_verified: bool = False
    company_name: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        # camelCase: this is the wire shape of /api/auth/me.
        return {
            "id": self.user_id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role.value,
            "companyId": self.company_id,
            "companyName": self.company_name,
            "onboardingCompleted": self.onboarding_completed,
            "emailVerified": self.email_verified,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionUser":
        company_id = data.get("companyId")
        return cls(
            user_id=int(data["id"]),
            email=str(data.get("email", "")),
            first_name=str(data.get("firstName", "")),
            last_name=str(data.get("lastName", "")),
            role=Role(data.get("role", Role.EMPLOYEE.value)),
            company_id=int(company_id) if company_id is not None else None,
            onboarding_completed=bool(data.get("onboardingCompleted", False)),
            email_verified=bool(data.get("emailVerified", False)),
            company_name=data.get("companyName"),
        )


@dataclass(frozen=True)
class Session:
    """Snapshot of the session provider at one point in time."""

    user: Optional[SessionUser]
    loading: bool
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return not self.loading and self.user is not None


ANONYMOUS = Session(user=None, loading=False)
