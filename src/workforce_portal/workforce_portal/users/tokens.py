from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError

ALGORITHM = "HS256"


class TokenService:
    """Bearer tokens for the companion client (the browser uses the cookie session)."""

    def __init__(self, secret_key: str, *, expire_days: int = DEFAULT_SESSION_DAYS):
        self._secret_key = secret_key
        self._expire = timedelta(days=expire_days)

    def issue(self, user_id: int, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        claims = {"sub": str(user_id), "iat": now, "exp": now + self._expire, "type": "access"}
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> int:
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Session expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e

        if claims.get("type") != "access":
            raise AuthenticationError("Invalid token")
        return int(claims["sub"])
