from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import ClockAction, ClockMethod


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one day of attendance for one user."""

    attendance_id: int
    user_id: int
    work_date: date
    clock_in_time: datetime
    clock_out_time: Optional[datetime]
    method: ClockMethod = ClockMethod.MANUAL

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "workDate": self.work_date.isoformat(),
            "clockInTime": self.clock_in_time.isoformat(),
            "clockOutTime": self.clock_out_time.isoformat() if self.clock_out_time else None,
            "method": self.method.value,
        }


@dataclass(frozen=True)
class QueuedAction:
    """A clock action captured while offline, replayed later."""

    id: str
    type: ClockAction
    timestamp: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"id": self.id, "type": self.type.value, "timestamp": self.timestamp, "data": dict(self.data)}

    @classmethod
    def from_dict(cls, raw: dict) -> "QueuedAction":
        return cls(
            id=str(raw["id"]),
            type=ClockAction(raw["type"]),
            timestamp=str(raw["timestamp"]),
            data=dict(raw.get("data") or {}),
        )


@dataclass(frozen=True)
class BiometricCapabilities:
    has_hardware: bool
    is_enrolled: bool


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    error: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self.error == "user_cancel"
