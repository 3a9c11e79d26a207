from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..session.model import SessionUser


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no DB access code in here.
    """

    user_id: int
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: Role
    company_id: Optional[int]
    onboarding_completed: bool = False
    email_verified: bool = False
    is_active: bool = True

    def to_session_user(self, *, company_name: Optional[str] = None) -> SessionUser:
        return SessionUser(
            user_id=self.user_id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            role=self.role,
            company_id=self.company_id,
            onboarding_completed=self.onboarding_completed,
            email_verified=self.email_verified,
            company_name=company_name,
        )
