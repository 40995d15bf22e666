from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_id(value: Optional[str], field_name: str) -> str:
    value = require_non_empty(value, field_name)
    if "/" in value:
        raise ValidationError(f"{field_name} must not contain '/'")
    return value
