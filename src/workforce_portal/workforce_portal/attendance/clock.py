from __future__ import annotations

import logging
from typing import Callable, Optional

from ..company.model import CompanySettings
from ..core.enums import ClockAction, ClockMethod, Role
from ..core.exceptions import BiometricVerificationError
from ..session.model import SessionUser
from .biometrics import BiometricVerifier

log = logging.getLogger(__name__)

ClockCallback = Callable[[ClockMethod], None]


def requires_biometrics(user: Optional[SessionUser], settings: Optional[CompanySettings]) -> bool:
    if user is None or user.role != Role.EMPLOYEE:
        return False
    return bool(settings and settings.biometrics_required)


class ClockService:
    """Runs a clock action, behind a biometric prompt when the company requires one."""

    def __init__(self, verifier: BiometricVerifier):
        self._verifier = verifier

    def authenticate_and_act(
        self,
        action: ClockAction,
        user: Optional[SessionUser],
        settings: Optional[CompanySettings],
        on_success: ClockCallback,
    ) -> bool:
        """Return True when ``on_success`` ran.

        A cancelled prompt returns False quietly; any other failed
        verification raises ``BiometricVerificationError``.
        """
        if not requires_biometrics(user, settings):
            on_success(ClockMethod.MANUAL)
            return True

        label = "In" if action == ClockAction.CLOCK_IN else "Out"
        result = self._verifier.authenticate(f"Clock {label} with Face ID/Fingerprint")

        if result.success:
            on_success(ClockMethod.BIOMETRIC)
            return True
        if result.cancelled:
            return False

        log.warning("biometric verification failed for user %s: %s", user.user_id, result.error)
        raise BiometricVerificationError(
            "Could not verify your identity. Please try again or use your device passcode."
        )
