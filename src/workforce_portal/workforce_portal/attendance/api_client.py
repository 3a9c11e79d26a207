from __future__ import annotations

from typing import Any

import requests

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.enums import ClockAction
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, RateLimitedError, ValidationError

_PATHS = {
    ClockAction.CLOCK_IN: "/api/attendance/clock-in",
    ClockAction.CLOCK_OUT: "/api/attendance/clock-out",
}


class ApiAttendanceRecorder:
    """Sends clock actions to the portal API (companion client side)."""

    def __init__(self, base_url: str, token: str, *, timeout: int = DEFAULT_API_TIMEOUT_SECONDS):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    def record(self, action: ClockAction, *, timestamp: str, data: dict[str, Any]) -> None:
        payload = dict(data)
        payload["timestamp"] = timestamp
        try:
            resp = requests.post(
                f"{self._base_url}{_PATHS[action]}",
                json=payload,
                headers={"Authorization": f"Bearer {self._token}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise DomainError(f"Network error while recording {action.value}: {e}") from e

        if resp.status_code == 429:
            raise RateLimitedError("Too many requests")
        if resp.status_code == 400:
            body = resp.json()
            raise ValidationError(body.get("message") or "Rejected by server")
        if resp.status_code == 401:
            raise AuthenticationError("Not signed in")
        if resp.status_code == 403:
            body = resp.json()
            raise AuthorizationError(body.get("message") or "Not allowed")
        if not 200 <= resp.status_code < 300:
            raise DomainError(f"Failed to record {action.value}: HTTP {resp.status_code}")
