from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_bool(value: Any, field_name: str) -> bool:
    # bool is checked strictly: 0/1 and "true" are rejected.
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a boolean")
    return value
