from __future__ import annotations

from ..common.validators import require_bool
from ..core.constants import BIOMETRIC_STORAGE_KEY
from .storage import KeyValueStorage


class BiometricStore:
    """Remembers whether this device finished biometric setup.

    The flag lives under ``biometric-storage`` as ``{"state": {...}}``.
    Every mutation is written through immediately.
    """

    def __init__(self, storage: KeyValueStorage, *, key: str = BIOMETRIC_STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._complete = self._load()

    def _load(self) -> bool:
        data = self._storage.get_item(self._key)
        if not isinstance(data, dict):
            return False
        state = data.get("state") or {}
        return state.get("isBiometricSetupComplete") is True

    def _persist(self) -> None:
        self._storage.set_item(self._key, {"state": {"isBiometricSetupComplete": self._complete}})

    @property
    def is_biometric_setup_complete(self) -> bool:
        return self._complete

    def set_biometric_setup_complete(self, value: bool) -> None:
        self._complete = require_bool(value, "isBiometricSetupComplete")
        self._persist()

    def reset_biometric_setup(self) -> None:
        self._complete = False
        self._persist()
