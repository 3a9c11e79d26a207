"""Companion-client composition: the device side of the portal.

Wires the persisted stores, the API-backed session provider and the clock
flow together the way the mobile companion uses them. Everything device
local goes through one ``KeyValueStorage``.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import requests
from dotenv import load_dotenv

from ..attendance.api_client import ApiAttendanceRecorder
from ..attendance.biometrics import BiometricSetupService, BiometricVerifier, SetupOutcome, should_prompt_setup
from ..attendance.clock import ClockService
from ..attendance.offline_queue import OfflineQueue
from ..common.datetime_utils import now_local
from ..company.source import ApiCompanySettingsSource
from ..core.constants import AUTH_TOKEN_KEY, DEFAULT_API_TIMEOUT_SECONDS, DEFAULT_DEVICE_STORAGE_PATH
from ..core.enums import ClockAction, ClockMethod
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    RateLimitedError,
    ValidationError,
)
from ..gates.gate import GateDecision, evaluate
from ..gates.policy import GatePolicy
from ..session.model import Session, SessionUser
from ..session.provider import SessionProvider
from ..session.source import ApiUserSource
from ..stores.auth_store import AuthStore
from ..stores.biometric_store import BiometricStore
from ..stores.storage import JsonFileStorage, KeyValueStorage

log = logging.getLogger(__name__)


class CompanionClient:
    def __init__(
        self,
        base_url: str,
        storage: KeyValueStorage,
        verifier: BiometricVerifier,
        *,
        timeout: int = DEFAULT_API_TIMEOUT_SECONDS,
    ):
        self._base_url = base_url.rstrip("/")
        self._storage = storage
        self._verifier = verifier
        self._timeout = timeout

        self.biometric_store = BiometricStore(storage)
        self.offline_queue = OfflineQueue(storage)
        self.auth_store = AuthStore(storage, self._settings_source())
        self._provider: Optional[SessionProvider] = None

    @classmethod
    def from_env(cls, verifier: BiometricVerifier) -> "CompanionClient":
        load_dotenv(override=False)
        return cls(
            os.getenv("PORTAL_API_URL", "http://localhost:5000"),
            JsonFileStorage(os.getenv("DEVICE_STORAGE_PATH", DEFAULT_DEVICE_STORAGE_PATH)),
            verifier,
        )

    @property
    def token(self) -> Optional[str]:
        return self._storage.get_item(AUTH_TOKEN_KEY)

    def _settings_source(self) -> Optional[ApiCompanySettingsSource]:
        token = self.token
        return ApiCompanySettingsSource(self._base_url, token, timeout=self._timeout) if token else None

    def _recorder(self) -> ApiAttendanceRecorder:
        token = self.token
        if not token:
            raise AuthenticationError("Not signed in")
        return ApiAttendanceRecorder(self._base_url, token, timeout=self._timeout)

    # -- session -----------------------------------------------------------

    def sign_in(self, email: str, password: str) -> SessionUser:
        try:
            resp = requests.post(
                f"{self._base_url}/api/auth/login",
                json={"email": email, "password": password},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise DomainError(f"Network error while signing in: {e}") from e

        if resp.status_code == 429:
            raise RateLimitedError("Too many requests")
        body = resp.json() if resp.content else {}
        if resp.status_code == 401 or not body.get("success"):
            raise AuthenticationError(body.get("message") or "Invalid email or password")

        self._storage.set_item(AUTH_TOKEN_KEY, body["data"]["token"])
        user = SessionUser.from_dict(body["data"]["user"])
        self.auth_store = AuthStore(self._storage, self._settings_source())
        self.auth_store.set_user(user)
        self.auth_store.fetch_company_settings()
        return user

    def load_session(self) -> Session:
        """Mount a provider and resolve who is signed in.

        ``RateLimitedError`` propagates so the caller can show the 429 screen.
        """
        self._provider = SessionProvider(ApiUserSource(self._base_url, self.token, timeout=self._timeout))
        snapshot = self._provider.fetch()

        self.auth_store = AuthStore(self._storage, self._settings_source())
        if snapshot.user is not None:
            self.auth_store.set_user(snapshot.user)
            self.auth_store.fetch_company_settings()
        elif snapshot.error is None:
            # A clean "nobody" answer means the stored token is dead.
            self.auth_store.clear()
        return snapshot

    def navigate(self, policy: GatePolicy, location: str) -> GateDecision:
        snapshot = self._provider.snapshot() if self._provider is not None else None
        return evaluate(snapshot, policy, location)

    def sign_out(self) -> None:
        self._storage.remove_item(AUTH_TOKEN_KEY)
        self.auth_store.clear()
        if self._provider is not None:
            self._provider.clear()

    # -- biometrics and clocking --------------------------------------------

    def needs_biometric_setup(self) -> bool:
        return should_prompt_setup(self.auth_store.user, self.auth_store.company_settings, self.biometric_store)

    def set_up_biometrics(self) -> SetupOutcome:
        return BiometricSetupService(self.biometric_store, self._verifier).set_up()

    def skip_biometric_setup(self) -> SetupOutcome:
        return BiometricSetupService(self.biometric_store, self._verifier).skip()

    def clock(self, action: ClockAction) -> bool:
        """Clock in or out, queueing the action when the API is unreachable.

        Returns False when the user cancelled the biometric prompt.
        """
        recorder = self._recorder()

        def send(method: ClockMethod) -> None:
            timestamp = now_local().isoformat()
            try:
                recorder.record(action, timestamp=timestamp, data={"method": method.value})
            except (ValidationError, AuthenticationError, AuthorizationError, RateLimitedError):
                # Server rejections are not queued.
                raise
            except DomainError as e:
                log.warning("clock %s not delivered, queueing: %s", action.value, e)
                queued_method = ClockMethod.OFFLINE_SYNC if method == ClockMethod.MANUAL else method
                self.offline_queue.enqueue(action, {"method": queued_method.value})

        return ClockService(self._verifier).authenticate_and_act(
            action, self.auth_store.user, self.auth_store.company_settings, send
        )

    def sync_offline(self) -> int:
        if not self.offline_queue.get_queue():
            return 0
        sent = self.offline_queue.flush(self._recorder())
        log.info("synced %d offline clock action(s)", sent)
        return sent
