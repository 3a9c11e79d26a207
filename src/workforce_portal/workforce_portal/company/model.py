from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Company:
    """Domain entity: a company (tenant) row."""

    company_id: int
    name: str
    biometrics_required: bool = False
    logo_url: Optional[str] = None

    def settings(self) -> "CompanySettings":
        return CompanySettings(id=self.company_id, name=self.name, biometrics_required=self.biometrics_required)


@dataclass(frozen=True)
class CompanySettings:
    """Per-company settings the clients cache."""

    id: int
    name: str
    biometrics_required: bool

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "biometrics_required": self.biometrics_required}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompanySettings":
        # Older payloads call the flag biometric_clocking.
        required = data.get("biometrics_required", data.get("biometric_clocking", False))
        return cls(id=int(data["id"]), name=str(data.get("name", "")), biometrics_required=bool(required))
