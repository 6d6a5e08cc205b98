"""Date helpers for Storefront API response fields."""
from __future__ import annotations

from datetime import datetime, timezone

from .errors import InvalidDateFormatError


def parse_utc_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp such as ``2024-01-01T00:00:00Z``.

    The timestamp must carry an offset; the result is converted to UTC.

    Raises:
        InvalidDateFormatError: If ``value`` is not a valid timestamp.
    """
    if not isinstance(value, str):
        raise InvalidDateFormatError("Invalid UTC date format")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateFormatError(f"Invalid UTC date format: {value!r}") from exc
    if parsed.tzinfo is None:
        raise InvalidDateFormatError(f"Invalid UTC date format: {value!r} has no offset")
    return parsed.astimezone(timezone.utc)
