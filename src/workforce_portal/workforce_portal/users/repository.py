from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: Role,
        company_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def set_company(self, user_id: int, *, company_id: int) -> bool:
        raise NotImplementedError

    def mark_onboarding_completed(self, user_id: int) -> bool:
        raise NotImplementedError
