from __future__ import annotations

from typing import Optional, Protocol

from .model import Company


class CompanyRepository(Protocol):
    """Repository interface for companies.

    Services depend on this, never on a concrete database.
    """

    def get_by_id(self, company_id: int) -> Optional[Company]:
        raise NotImplementedError

    def create(self, *, name: str) -> int:
        raise NotImplementedError

    def update_name(self, company_id: int, *, name: str) -> bool:
        raise NotImplementedError

    def set_biometrics_required(self, company_id: int, *, required: bool) -> bool:
        raise NotImplementedError

    def set_logo_url(self, company_id: int, *, logo_url: str) -> bool:
        raise NotImplementedError
