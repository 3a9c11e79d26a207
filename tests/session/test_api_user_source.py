from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from workforce_portal.core.enums import Role
from workforce_portal.core.exceptions import DomainError, RateLimitedError
from workforce_portal.session.source import ApiUserSource

ME = {
    "id": 5,
    "email": "emp@acme.test",
    "firstName": "Emp",
    "lastName": "Loyee",
    "role": "employee",
    "companyId": 10,
    "companyName": "Acme",
    "onboardingCompleted": True,
    "emailVerified": True,
}


def _response(status_code, body=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = body or {}
    return resp


def test_no_token_means_nobody_signed_in():
    with patch("workforce_portal.session.source.requests.get") as get:
        assert ApiUserSource("http://api.test", None).fetch_current_user() is None
    get.assert_not_called()


def test_success_parses_user_and_sends_bearer():
    with patch("workforce_portal.session.source.requests.get", return_value=_response(200, {"success": True, "data": ME})) as get:
        user = ApiUserSource("http://api.test/", "tok").fetch_current_user()

    assert user.user_id == 5
    assert user.role == Role.EMPLOYEE
    assert user.onboarding_completed is True
    args, kwargs = get.call_args
    assert args[0] == "http://api.test/api/auth/me"
    assert kwargs["headers"]["Authorization"] == "Bearer tok"


def test_unauthorized_is_anonymous():
    with patch("workforce_portal.session.source.requests.get", return_value=_response(401)):
        assert ApiUserSource("http://api.test", "expired").fetch_current_user() is None


def test_too_many_requests_raises_rate_limited():
    with patch("workforce_portal.session.source.requests.get", return_value=_response(429)):
        with pytest.raises(RateLimitedError):
            ApiUserSource("http://api.test", "tok").fetch_current_user()


def test_server_error_and_network_error_are_domain_errors():
    with patch("workforce_portal.session.source.requests.get", return_value=_response(500)):
        with pytest.raises(DomainError):
            ApiUserSource("http://api.test", "tok").fetch_current_user()

    with patch("workforce_portal.session.source.requests.get", side_effect=requests.ConnectionError("down")):
        with pytest.raises(DomainError):
            ApiUserSource("http://api.test", "tok").fetch_current_user()


def test_unsuccessful_body_carries_message():
    with patch(
        "workforce_portal.session.source.requests.get",
        return_value=_response(200, {"success": False, "message": "Account disabled"}),
    ):
        with pytest.raises(DomainError, match="Account disabled"):
            ApiUserSource("http://api.test", "tok").fetch_current_user()
