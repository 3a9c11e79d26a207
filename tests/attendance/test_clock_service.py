from __future__ import annotations

import pytest

from workforce_portal.attendance.clock import ClockService, requires_biometrics
from workforce_portal.attendance.model import VerificationResult
from workforce_portal.company.model import CompanySettings
from workforce_portal.core.enums import ClockAction, ClockMethod, Role
from workforce_portal.core.exceptions import BiometricVerificationError
from workforce_portal.session.model import SessionUser

from fakes import FakeVerifier

STRICT = CompanySettings(id=10, name="Acme", biometrics_required=True)
LAX = CompanySettings(id=10, name="Acme", biometrics_required=False)


def _user(role):
    return SessionUser(
        user_id=2, email="e@acme.test", first_name="E", last_name="", role=role, company_id=10, onboarding_completed=True
    )


def test_requires_biometrics_only_for_employees_of_strict_companies():
    assert requires_biometrics(_user(Role.EMPLOYEE), STRICT)
    assert not requires_biometrics(_user(Role.EMPLOYEE), LAX)
    assert not requires_biometrics(_user(Role.OWNER), STRICT)
    assert not requires_biometrics(None, STRICT)
    assert not requires_biometrics(_user(Role.EMPLOYEE), None)


def test_manager_acts_without_prompt():
    verifier = FakeVerifier()
    done = []
    assert ClockService(verifier).authenticate_and_act(ClockAction.CLOCK_IN, _user(Role.MANAGER), STRICT, done.append)
    assert done == [ClockMethod.MANUAL]
    assert verifier.prompts == []


def test_employee_verified_acts_biometrically():
    verifier = FakeVerifier()
    done = []
    assert ClockService(verifier).authenticate_and_act(ClockAction.CLOCK_OUT, _user(Role.EMPLOYEE), STRICT, done.append)
    assert done == [ClockMethod.BIOMETRIC]
    assert verifier.prompts == ["Clock Out with Face ID/Fingerprint"]


def test_cancel_is_silent():
    verifier = FakeVerifier(results=[VerificationResult(success=False, error="user_cancel")])
    done = []
    assert not ClockService(verifier).authenticate_and_act(ClockAction.CLOCK_IN, _user(Role.EMPLOYEE), STRICT, done.append)
    assert done == []


def test_failed_verification_raises():
    verifier = FakeVerifier(results=[VerificationResult(success=False, error="lockout")])
    done = []
    with pytest.raises(BiometricVerificationError):
        ClockService(verifier).authenticate_and_act(ClockAction.CLOCK_IN, _user(Role.EMPLOYEE), STRICT, done.append)
    assert done == []
