from __future__ import annotations

import logging
from typing import Optional

from ..company.model import CompanySettings
from ..company.source import CompanySettingsSource
from ..core.constants import AUTH_STORAGE_KEY
from ..core.exceptions import DomainError
from ..session.model import SessionUser
from .storage import KeyValueStorage

log = logging.getLogger(__name__)


class AuthStore:
    """Device-side snapshot of the signed-in user and their company settings.

    Company settings are cached per user: switching to another user drops
    them until the next ``fetch_company_settings()``.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        settings_source: Optional[CompanySettingsSource] = None,
        *,
        key: str = AUTH_STORAGE_KEY,
    ):
        self._storage = storage
        self._settings_source = settings_source
        self._key = key
        self._user: Optional[SessionUser] = None
        self._company_settings: Optional[CompanySettings] = None
        self._load()

    def _load(self) -> None:
        data = self._storage.get_item(self._key)
        if not isinstance(data, dict):
            return
        state = data.get("state") or {}
        try:
            if state.get("user"):
                self._user = SessionUser.from_dict(state["user"])
            if state.get("companySettings"):
                self._company_settings = CompanySettings.from_dict(state["companySettings"])
        except (KeyError, TypeError, ValueError):
            log.warning("discarding unreadable %s snapshot", self._key)
            self._user = None
            self._company_settings = None

    def _persist(self) -> None:
        self._storage.set_item(
            self._key,
            {
                "state": {
                    "user": self._user.to_dict() if self._user else None,
                    "companySettings": self._company_settings.to_dict() if self._company_settings else None,
                }
            },
        )

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def company_settings(self) -> Optional[CompanySettings]:
        return self._company_settings

    @property
    def biometrics_required(self) -> bool:
        return bool(self._company_settings and self._company_settings.biometrics_required)

    def set_user(self, user: Optional[SessionUser]) -> None:
        previous = self._user
        self._user = user
        if user is None or previous is None or previous.user_id != user.user_id:
            self._company_settings = None
        self._persist()

    def set_company_settings(self, settings: Optional[CompanySettings]) -> None:
        self._company_settings = settings
        self._persist()

    def fetch_company_settings(self) -> Optional[CompanySettings]:
        user = self._user
        if user is None or user.company_id is None or self._settings_source is None:
            return self._company_settings

        try:
            settings = self._settings_source.fetch_company_settings(user.company_id)
        except DomainError as e:
            log.error("failed to fetch company settings: %s", e)
            return self._company_settings

        self.set_company_settings(settings)
        return settings

    def clear(self) -> None:
        self._user = None
        self._company_settings = None
        self._storage.remove_item(self._key)
