from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.constants import TOO_MANY_REQUESTS_ROUTE
from ..core.enums import Role
from ..core.exceptions import DomainError, RateLimitedError
from .model import Session, SessionUser
from .source import UserSource

log = logging.getLogger(__name__)


class SessionProvider:
    """Owns the session state that gates project from.

    Starts in the loading state; ``fetch()`` resolves it. Only a completed
    fetch or ``clear()`` (sign-out) mutate the user.
    """

    def __init__(self, source: UserSource, *, current_path: Optional[str] = None):
        self._source = source
        self._current_path = current_path
        self._user: Optional[SessionUser] = None
        self._loading = True
        self._error: Optional[str] = None

    @property
    def user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    def snapshot(self) -> Session:
        return Session(user=self._user, loading=self._loading, error=self._error)

    def fetch(self) -> Session:
        # Fetching from the rate-limit page would only earn another 429.
        if self._current_path == TOO_MANY_REQUESTS_ROUTE:
            self._loading = False
            return self.snapshot()

        try:
            self._user = self._source.fetch_current_user()
            self._error = None
        except RateLimitedError:
            self._user = None
            self._error = "Too many requests"
            raise
        except DomainError as e:
            log.warning("session fetch failed: %s", e)
            self._user = None
            self._error = str(e)
        except Exception:
            log.exception("unexpected error while fetching session user")
            self._user = None
            self._error = "Failed to fetch user"
        finally:
            self._loading = False

        return self.snapshot()

    def refetch(self) -> Session:
        self._loading = True
        return self.fetch()

    def clear(self) -> None:
        self._user = None
        self._error = None
        self._loading = False

    def has_role(self, roles: Role | Iterable[Role]) -> bool:
        if self._user is None:
            return False
        if isinstance(roles, Role):
            return self._user.role == roles
        return self._user.role in set(roles)
