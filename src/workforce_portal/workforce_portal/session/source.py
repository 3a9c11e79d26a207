from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from ..company.repository import CompanyRepository
from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.exceptions import DomainError, RateLimitedError
from ..users.repository import UserRepository
from .model import SessionUser

log = logging.getLogger(__name__)


class UserSource(Protocol):
    """Where the session provider gets the current user from.

    Returns None when nobody is signed in.
    """

    def fetch_current_user(self) -> Optional[SessionUser]:
        raise NotImplementedError


class RepositoryUserSource:
    """Server-side source: resolves the user id stored in the Flask session."""

    def __init__(self, users: UserRepository, companies: CompanyRepository | None, user_id: Optional[int]):
        self._users = users
        self._companies = companies
        self._user_id = user_id

    def fetch_current_user(self) -> Optional[SessionUser]:
        if self._user_id is None:
            return None

        user = self._users.get_by_id(int(self._user_id))
        if not user or not user.is_active:
            return None

        company_name = None
        if self._companies and user.company_id:
            company = self._companies.get_by_id(user.company_id)
            company_name = company.name if company else None

        return user.to_session_user(company_name=company_name)


class ApiUserSource:
    """Companion-client source: asks the portal API who is signed in."""

    def __init__(self, base_url: str, token: Optional[str], *, timeout: int = DEFAULT_API_TIMEOUT_SECONDS):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    def fetch_current_user(self) -> Optional[SessionUser]:
        if not self._token:
            return None

        try:
            resp = requests.get(
                f"{self._base_url}/api/auth/me",
                headers={"Authorization": f"Bearer {self._token}"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise DomainError(f"Network error while fetching user: {e}") from e

        # 401 only means "not signed in".
        if resp.status_code == 401:
            return None
        if resp.status_code == 429:
            raise RateLimitedError("Too many requests")
        if resp.status_code != 200:
            raise DomainError(f"Failed to fetch user: HTTP {resp.status_code}")

        body = resp.json()
        if not body.get("success"):
            raise DomainError(body.get("message") or "Failed to fetch user")
        return SessionUser.from_dict(body["data"])
