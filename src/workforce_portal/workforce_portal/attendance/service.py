from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import ClockMethod
from ..core.exceptions import AuthorizationError, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository


class AttendanceService:
    """Server-side clock-in/clock-out bookkeeping, one record per user per day."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    @staticmethod
    def _resolve_time(at: Optional[datetime]) -> datetime:
        current = now_local()
        if at is None:
            return current
        if at > current:
            raise ValidationError("Clock time cannot be in the future")
        return at

    def clock_in(
        self,
        user_id: int,
        *,
        method: ClockMethod = ClockMethod.MANUAL,
        biometrics_required: bool = False,
        at: Optional[datetime] = None,
    ) -> AttendanceRecord:
        if biometrics_required and method != ClockMethod.BIOMETRIC:
            raise AuthorizationError("Biometric verification is required to clock in")

        when = self._resolve_time(at)
        today = when.date()
        if self._attendance.get_for_user_and_date(user_id, today):
            raise ValidationError("You have already clocked in today")

        attendance_id = self._attendance.create_clock_in(
            user_id=user_id, work_date=today, clock_in_time=when, method=method
        )
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=today,
            clock_in_time=when,
            clock_out_time=None,
            method=method,
        )

    def clock_out(
        self,
        user_id: int,
        *,
        method: ClockMethod = ClockMethod.MANUAL,
        biometrics_required: bool = False,
        at: Optional[datetime] = None,
    ) -> AttendanceRecord:
        if biometrics_required and method != ClockMethod.BIOMETRIC:
            raise AuthorizationError("Biometric verification is required to clock out")

        when = self._resolve_time(at)
        record = self._attendance.get_for_user_and_date(user_id, when.date())
        if not record:
            raise ValidationError("You have not clocked in today")
        if record.clock_out_time is not None:
            raise ValidationError("You have already clocked out today")
        if when < record.clock_in_time:
            raise ValidationError("Clock-out cannot be before clock-in")

        if not self._attendance.update_clock_out(attendance_id=record.attendance_id, clock_out_time=when):
            raise ValidationError("You have already clocked out today")

        return AttendanceRecord(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            clock_in_time=record.clock_in_time,
            clock_out_time=when,
            method=record.method,
        )

    def get_today_record(self, user_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, now_local().date())

    def get_history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT):
        return list(self._attendance.get_recent_for_user(user_id, limit))
