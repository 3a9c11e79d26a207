from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from workforce_portal.attendance.api_client import ApiAttendanceRecorder
from workforce_portal.core.enums import ClockAction
from workforce_portal.core.exceptions import AuthorizationError, DomainError, RateLimitedError, ValidationError


def _response(status_code, body=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body or {}
    return resp


def test_posts_action_with_timestamp():
    with patch("workforce_portal.attendance.api_client.requests.post", return_value=_response(200)) as post:
        ApiAttendanceRecorder("http://api.test", "tok").record(
            ClockAction.CLOCK_OUT, timestamp="2026-03-02T17:00:00", data={"method": "BIOMETRIC"}
        )

    args, kwargs = post.call_args
    assert args[0] == "http://api.test/api/attendance/clock-out"
    assert kwargs["json"] == {"method": "BIOMETRIC", "timestamp": "2026-03-02T17:00:00"}
    assert kwargs["headers"] == {"Authorization": "Bearer tok"}


@pytest.mark.parametrize(
    "status, body, exc",
    [
        (400, {"message": "You have already clocked in today"}, ValidationError),
        (403, {"message": "Biometric verification is required to clock in"}, AuthorizationError),
        (429, None, RateLimitedError),
        (502, None, DomainError),
    ],
)
def test_error_statuses(status, body, exc):
    with patch("workforce_portal.attendance.api_client.requests.post", return_value=_response(status, body)):
        with pytest.raises(exc):
            ApiAttendanceRecorder("http://api.test", "tok").record(ClockAction.CLOCK_IN, timestamp="t", data={})


def test_network_error_is_domain_error():
    with patch("workforce_portal.attendance.api_client.requests.post", side_effect=requests.ConnectionError()):
        with pytest.raises(DomainError, match="Network error"):
            ApiAttendanceRecorder("http://api.test", "tok").record(ClockAction.CLOCK_IN, timestamp="t", data={})
