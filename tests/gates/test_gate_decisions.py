from __future__ import annotations

import pytest

from workforce_portal.core.enums import GateOutcome, Role, SessionPhase
from workforce_portal.gates.gate import classify, evaluate
from workforce_portal.gates.policy import DASHBOARD_POLICY, LANDING_POLICY, ONBOARDING_POLICY
from workforce_portal.session.model import Session, SessionUser


def _user(onboarding_completed: bool) -> SessionUser:
    return SessionUser(
        user_id=1,
        email="a@acme.test",
        first_name="A",
        last_name="B",
        role=Role.OWNER,
        company_id=10,
        onboarding_completed=onboarding_completed,
    )


@pytest.mark.parametrize("policy", [LANDING_POLICY, DASHBOARD_POLICY])
@pytest.mark.parametrize("user", [None, _user(False), _user(True)])
def test_loading_shows_placeholder_regardless_of_user(policy, user):
    decision = evaluate(Session(user=user, loading=True), policy, "/dashboard")
    assert decision.kind == "loading"
    assert not decision.is_redirect


def test_landing_renders_for_anonymous():
    assert evaluate(Session(user=None, loading=False), LANDING_POLICY, "/").kind == "render"


def test_landing_renders_for_incomplete_user():
    assert evaluate(Session(user=_user(False), loading=False), LANDING_POLICY, "/").kind == "render"


def test_landing_redirects_onboarded_user_to_dashboard():
    decision = evaluate(Session(user=_user(True), loading=False), LANDING_POLICY, "/")
    assert decision.is_redirect
    assert decision.outcome == GateOutcome.REDIRECT_DASHBOARD
    assert decision.target == "/dashboard"
    assert decision.replace is True


def test_dashboard_sends_anonymous_to_login_with_origin():
    decision = evaluate(Session(user=None, loading=False), DASHBOARD_POLICY, "/dashboard/settings")
    assert decision.target == "/login"
    assert decision.replace is True
    assert decision.state == {"from": "/dashboard/settings"}
    assert decision.return_to == "/dashboard/settings"


def test_dashboard_restarts_onboarding_for_incomplete_user():
    decision = evaluate(Session(user=_user(False), loading=False), DASHBOARD_POLICY, "/dashboard")
    assert decision.outcome == GateOutcome.REDIRECT_ONBOARDING
    assert decision.target == "/onboarding/company-setup"
    assert decision.state == {}


def test_dashboard_renders_for_onboarded_user():
    assert evaluate(Session(user=_user(True), loading=False), DASHBOARD_POLICY, "/dashboard").kind == "render"


def test_missing_provider_is_anonymous(caplog):
    assert evaluate(None, LANDING_POLICY, "/").kind == "render"

    decision = evaluate(None, DASHBOARD_POLICY, "/dashboard")
    assert decision.target == "/login"
    assert "session provider not available" in caplog.text


def test_onboarding_redirects_completed_user_only_under_prefix():
    complete = Session(user=_user(True), loading=False)
    assert evaluate(complete, ONBOARDING_POLICY, "/onboarding/company-setup").target == "/dashboard"
    assert evaluate(complete, ONBOARDING_POLICY, "/help").kind == "render"


def test_onboarding_renders_for_anonymous_and_incomplete():
    assert evaluate(Session(user=None, loading=False), ONBOARDING_POLICY, "/onboarding/register").kind == "render"
    assert evaluate(Session(user=_user(False), loading=False), ONBOARDING_POLICY, "/onboarding/company-setup").kind == "render"


def test_classify_phases():
    assert classify(None) == SessionPhase.UNAUTHENTICATED
    assert classify(Session(user=None, loading=True)) == SessionPhase.LOADING
    assert classify(Session(user=_user(False), loading=False)) == SessionPhase.AUTHENTICATED_INCOMPLETE
    assert classify(Session(user=_user(True), loading=False)) == SessionPhase.AUTHENTICATED_COMPLETE
