from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..core.constants import DEFAULT_MAX_UPLOAD_BYTES

IMAGE_MIME_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")

_SUSPICIOUS_NAME = re.compile(r"test|dummy|sample|fake|temp|placeholder|example|demo|untitled", re.IGNORECASE)


@dataclass(frozen=True)
class FileValidation:
    is_valid: bool
    error: Optional[str] = None
    warnings: tuple[str, ...] = field(default_factory=tuple)


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def validate_upload(
    filename: str,
    size: int,
    mime_type: str,
    *,
    max_size: int = DEFAULT_MAX_UPLOAD_BYTES,
    allowed_types: Sequence[str] = (),
    allowed_extensions: Sequence[str] = (),
) -> FileValidation:
    if size > max_size:
        return FileValidation(
            is_valid=False,
            error=f"File size ({format_file_size(size)}) exceeds maximum allowed size ({format_file_size(max_size)})",
        )

    if allowed_types and mime_type not in allowed_types:
        return FileValidation(
            is_valid=False,
            error=f'File type "{mime_type}" is not allowed. Allowed types: {", ".join(allowed_types)}',
        )

    if allowed_extensions:
        extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if extension not in allowed_extensions:
            return FileValidation(
                is_valid=False,
                error=f'File extension ".{extension}" is not allowed. Allowed extensions: {", ".join(allowed_extensions)}',
            )

    warnings = []
    if size < 1000:
        warnings.append("File is very small - this might not be a valid document")
    if _SUSPICIOUS_NAME.search(filename):
        warnings.append("Filename suggests this might be a test or placeholder file")

    return FileValidation(is_valid=True, warnings=tuple(warnings))


def compute_file_hash(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()
