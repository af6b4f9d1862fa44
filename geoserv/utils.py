"""Shared utilities used across the service-area and availability modules."""

import re
from datetime import date, datetime, timezone
from typing import Optional, Union

WEEKDAY_LABELS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

DayLike = Union[date, datetime, str]


def normalize_zip_code(value: str) -> str:
    """Normalize a postal code by removing whitespace and upper-casing letters.

    Examples:
        >>> normalize_zip_code(" 94103 ")
        '94103'
        >>> normalize_zip_code("v6b 1a1")
        'V6B1A1'
    """
    return re.sub(r"\s+", "", value).upper()


def normalize_weekday(value: str) -> Optional[str]:
    """Map a weekday name or abbreviation to its three-letter label.

    Returns None for anything that is not a weekday.

    Examples:
        >>> normalize_weekday("wednesday")
        'Wed'
        >>> normalize_weekday("Funday") is None
        True
    """
    prefix = value.strip()[:3].title()
    return prefix if prefix in WEEKDAY_LABELS else None


def to_utc_day(value: DayLike) -> date:
    """Return the UTC calendar day for a date, datetime or ISO string.

    Naive datetimes are taken as UTC. Aware datetimes are converted to UTC
    first, so 2025-01-01T23:30-08:00 belongs to 2025-01-02.

    Raises:
        ValueError: If a string is not an ISO date or datetime.
    """
    if isinstance(value, str):
        text = value.strip()
        try:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"Invalid ISO day: {value!r}") from None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def utc_today() -> date:
    """Today's calendar day in UTC, independent of the server timezone."""
    return datetime.now(timezone.utc).date()


def weekday_label(day: date) -> str:
    """Three-letter weekday label for a calendar day."""
    return WEEKDAY_LABELS[day.weekday()]
