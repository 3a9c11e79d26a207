"""Biometric setup and the decision of when to ask for it."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Protocol

from ..company.model import CompanySettings
from ..core.enums import Role
from ..core.exceptions import BiometricNotEnrolledError
from ..session.model import SessionUser
from ..stores.biometric_store import BiometricStore
from .model import BiometricCapabilities, VerificationResult

log = logging.getLogger(__name__)


class BiometricVerifier(Protocol):
    """Device-side biometric prompt (fingerprint, face, PIN fallback)."""

    def check_hardware_and_enrollment(self) -> BiometricCapabilities:
        raise NotImplementedError

    def authenticate(self, prompt_message: str) -> VerificationResult:
        raise NotImplementedError


class SetupOutcome(str, Enum):
    COMPLETED = "COMPLETED"
    COMPLETED_WITH_PIN_FALLBACK = "COMPLETED_WITH_PIN_FALLBACK"
    SKIPPED = "SKIPPED"
    NOT_VERIFIED = "NOT_VERIFIED"


def should_prompt_setup(
    user: Optional[SessionUser],
    settings: Optional[CompanySettings],
    store: BiometricStore,
) -> bool:
    # Only regular employees clock in with biometrics.
    if user is None or user.role != Role.EMPLOYEE:
        return False
    if settings is None or not settings.biometrics_required:
        return False
    return not store.is_biometric_setup_complete


class BiometricSetupService:
    def __init__(self, store: BiometricStore, verifier: BiometricVerifier):
        self._store = store
        self._verifier = verifier

    def set_up(self) -> SetupOutcome:
        caps = self._verifier.check_hardware_and_enrollment()

        if not caps.has_hardware:
            # Device PIN/password still counts as setup.
            self._store.set_biometric_setup_complete(True)
            return SetupOutcome.COMPLETED_WITH_PIN_FALLBACK

        if not caps.is_enrolled:
            raise BiometricNotEnrolledError(
                "No biometrics enrolled. Enroll a fingerprint or face in device settings, then try again."
            )

        result = self._verifier.authenticate("Set up biometric clocking")
        if not result.success:
            log.info("biometric setup not verified (%s)", result.error)
            return SetupOutcome.NOT_VERIFIED

        self._store.set_biometric_setup_complete(True)
        return SetupOutcome.COMPLETED

    def skip(self) -> SetupOutcome:
        # Marked complete so the prompt stops appearing.
        self._store.set_biometric_setup_complete(True)
        return SetupOutcome.SKIPPED
