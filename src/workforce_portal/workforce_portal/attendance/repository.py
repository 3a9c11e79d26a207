from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ClockMethod
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_clock_in(self, *, user_id: int, work_date: date, clock_in_time: datetime, method: ClockMethod) -> int:
        raise NotImplementedError

    def update_clock_out(self, *, attendance_id: int, clock_out_time: datetime) -> bool:
        raise NotImplementedError
