from __future__ import annotations

from datetime import date, datetime

from ..core.constants import DATE_KEY_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), DATE_KEY_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def as_date(value: date | datetime) -> date:
    """Drop the time-of-day part; comparisons are by calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def date_key(value: date | datetime) -> str:
    """Local calendar-day key (no UTC conversion)."""
    return as_date(value).strftime(DATE_KEY_FORMAT)


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
