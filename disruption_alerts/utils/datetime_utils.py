"""Utility functions for working with dates and times."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any

__all__ = [
    "get_current_timestamp",
    "today",
    "parse_date",
    "to_datetime",
]


def get_current_timestamp() -> datetime:
    """Return the current UTC datetime with micro-second precision.

    This object can be stored directly in MongoDB where it will be written as
    a BSON Date.
    """
    return datetime.now(tz=timezone.utc)


def today() -> date:
    """Return the current UTC calendar date."""
    return get_current_timestamp().date()


def parse_date(value: Any) -> date:
    """Coerce *value* into a :class:`datetime.date`.

    Accepts ``date``/``datetime`` objects and ISO-8601 strings, of which only
    the leading ``YYYY-MM-DD`` part is used (feeds often append a time).

    Raises
    ------
    ValueError
        If *value* is empty or cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise ValueError("empty date value")
    return date.fromisoformat(str(value).strip()[:10])


def to_datetime(value: date | None) -> datetime | None:
    """Widen a calendar date to a UTC midnight datetime (BSON has no date type)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min, tzinfo=timezone.utc)
