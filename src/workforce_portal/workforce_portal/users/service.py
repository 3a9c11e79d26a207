from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_max_length, require_non_empty
from ..company.repository import CompanyRepository
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..session.model import SessionUser
from .repository import UserRepository

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, companies: Optional[CompanyRepository] = None):
        self._users = users
        self._companies = companies

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        company_name = None
        if self._companies and user.company_id:
            company = self._companies.get_by_id(user.company_id)
            company_name = company.name if company else None

        log.info("user %s signed in", user.user_id)
        return user.to_session_user(company_name=company_name)


class RegistrationService:
    """Use case: register a company owner who will then go through onboarding."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register_owner(self, *, email: str, password: str, first_name: str, last_name: str = "") -> int:
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is not valid")
        first_name = require_max_length(require_non_empty(first_name, "First name"), "First name", 100)
        last_name = require_max_length((last_name or "").strip(), "Last name", 100)
        if password is None or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        return self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            role=Role.OWNER,
            company_id=None,
        )
