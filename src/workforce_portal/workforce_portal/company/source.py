from __future__ import annotations

from typing import Protocol

import requests

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.exceptions import DomainError, RateLimitedError
from .model import CompanySettings


class CompanySettingsSource(Protocol):
    def fetch_company_settings(self, company_id: int) -> CompanySettings:
        raise NotImplementedError


class ApiCompanySettingsSource:
    """Reads company settings from the portal API on behalf of the companion client."""

    def __init__(self, base_url: str, token: str, *, timeout: int = DEFAULT_API_TIMEOUT_SECONDS):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    def fetch_company_settings(self, company_id: int) -> CompanySettings:
        try:
            resp = requests.get(
                f"{self._base_url}/api/company-settings",
                headers={"Authorization": f"Bearer {self._token}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise DomainError(f"Network error while fetching company settings: {e}") from e

        if resp.status_code == 429:
            raise RateLimitedError("Too many requests")
        if resp.status_code != 200:
            raise DomainError(f"Failed to fetch company settings: HTTP {resp.status_code}")

        body = resp.json()
        if not body.get("success"):
            raise DomainError(body.get("message") or "Failed to fetch company settings")

        settings = CompanySettings.from_dict(body["data"])
        if settings.id != int(company_id):
            raise DomainError("Company settings belong to another company")
        return settings
