from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_timestamp(value: Any, field_name: str = "timestamp") -> Optional[datetime]:
    """Parse an optional stored timestamp into an aware datetime.

    Accepts None, empty strings, ISO-8601 strings (a trailing 'Z' is allowed)
    and datetime instances. Values without an offset are read as local time.
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"{field_name} is not a valid ISO-8601 timestamp: {value!r}")
    else:
        raise ValidationError(f"{field_name} has unsupported type {type(value).__name__}")

    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def now_utc() -> datetime:
    """Current wall-clock time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc)
