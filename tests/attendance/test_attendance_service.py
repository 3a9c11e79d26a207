from __future__ import annotations

from datetime import datetime
from unittest.mock import patch

import pytest

from workforce_portal.attendance.service import AttendanceService
from workforce_portal.core.enums import ClockMethod
from workforce_portal.core.exceptions import AuthorizationError, ValidationError

from fakes import InMemoryAttendance

NOW = datetime(2026, 3, 2, 17, 30, 0)


@pytest.fixture
def svc():
    with patch("workforce_portal.attendance.service.now_local", return_value=NOW):
        yield AttendanceService(InMemoryAttendance())


def test_clock_in_then_out(svc):
    rec = svc.clock_in(1, at=datetime(2026, 3, 2, 8, 0))
    assert rec.work_date == NOW.date()
    assert rec.clock_out_time is None

    out = svc.clock_out(1)
    assert out.attendance_id == rec.attendance_id
    assert out.clock_out_time == NOW
    assert svc.get_today_record(1).clock_out_time == NOW
    assert len(svc.get_history(1)) == 1


def test_double_clock_in_rejected(svc):
    svc.clock_in(1, at=datetime(2026, 3, 2, 8, 0))
    with pytest.raises(ValidationError, match="already clocked in"):
        svc.clock_in(1)


def test_clock_out_without_clock_in_rejected(svc):
    with pytest.raises(ValidationError, match="not clocked in"):
        svc.clock_out(1)


def test_double_clock_out_rejected(svc):
    svc.clock_in(1, at=datetime(2026, 3, 2, 8, 0))
    svc.clock_out(1, at=datetime(2026, 3, 2, 12, 0))
    with pytest.raises(ValidationError, match="already clocked out"):
        svc.clock_out(1)


def test_clock_out_before_clock_in_rejected(svc):
    svc.clock_in(1, at=datetime(2026, 3, 2, 9, 0))
    with pytest.raises(ValidationError, match="before clock-in"):
        svc.clock_out(1, at=datetime(2026, 3, 2, 8, 0))


def test_future_time_rejected(svc):
    with pytest.raises(ValidationError):
        svc.clock_in(1, at=datetime(2026, 3, 2, 18, 0))


def test_biometric_requirement_enforced(svc):
    with pytest.raises(AuthorizationError):
        svc.clock_in(1, method=ClockMethod.MANUAL, biometrics_required=True)
    with pytest.raises(AuthorizationError):
        svc.clock_in(1, method=ClockMethod.OFFLINE_SYNC, biometrics_required=True)

    rec = svc.clock_in(1, method=ClockMethod.BIOMETRIC, biometrics_required=True)
    assert rec.method == ClockMethod.BIOMETRIC
