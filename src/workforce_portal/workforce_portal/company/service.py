from __future__ import annotations

import logging

from ..common.validators import require_bool, require_max_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..session.model import SessionUser
from ..users.repository import UserRepository
from .model import CompanySettings
from .repository import CompanyRepository

log = logging.getLogger(__name__)

SETTINGS_ADMIN_ROLES = frozenset({Role.OWNER, Role.ADMIN})


class CompanySettingsService:
    """Use case: read and change per-company settings."""

    def __init__(self, companies: CompanyRepository):
        self._companies = companies

    def get_settings(self, company_id: int) -> CompanySettings:
        company = self._companies.get_by_id(company_id)
        if not company:
            raise ValidationError("Company not found")
        return company.settings()

    def set_biometrics_required(self, *, actor: SessionUser, required: bool) -> CompanySettings:
        if actor.role not in SETTINGS_ADMIN_ROLES:
            raise AuthorizationError("Only owners and admins can change company settings")
        if actor.company_id is None:
            raise ValidationError("Company not found")

        required = require_bool(required, "biometrics_required")
        settings = self.get_settings(actor.company_id)
        # rowcount is 0 when the value is unchanged, so the result is not checked.
        self._companies.set_biometrics_required(actor.company_id, required=required)
        log.info("company %s biometrics_required=%s (by user %s)", actor.company_id, required, actor.user_id)
        return CompanySettings(id=settings.id, name=settings.name, biometrics_required=required)

    def set_logo(self, *, actor: SessionUser, logo_url: str) -> None:
        if actor.role not in SETTINGS_ADMIN_ROLES:
            raise AuthorizationError("Only owners and admins can change the company logo")
        if actor.company_id is None:
            raise ValidationError("Company not found")
        self._companies.set_logo_url(actor.company_id, logo_url=require_non_empty(logo_url, "Logo URL"))


class OnboardingService:
    """Use case: the company-setup step that finishes onboarding.

    There is a single step; an incomplete user is always sent back to it.
    """

    def __init__(self, users: UserRepository, companies: CompanyRepository):
        self._users = users
        self._companies = companies

    def complete_company_setup(self, *, user_id: int, company_name: str, biometrics_required: bool = False) -> int:
        company_name = require_max_length(require_non_empty(company_name, "Company name"), "Company name", 150)

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("User not found")
        if user.onboarding_completed:
            raise ValidationError("Onboarding is already complete")

        if user.company_id:
            company_id = user.company_id
            self._companies.update_name(company_id, name=company_name)
        else:
            company_id = self._companies.create(name=company_name)
            self._users.set_company(user_id, company_id=company_id)

        self._companies.set_biometrics_required(company_id, required=bool(biometrics_required))
        self._users.mark_onboarding_completed(user_id)
        log.info("user %s completed onboarding for company %s", user_id, company_id)
        return company_id
