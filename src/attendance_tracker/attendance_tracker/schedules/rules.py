"""Calendar rules: pure date predicates for auto-detected holidays.

Weeks of month are 7-day buckets anchored to day 1 (``ceil(day / 7)``), not
calendar weeks. Saturday is not a blanket weekend; only the 2nd and 4th are.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import as_date
from ..core.constants import GENERIC_HOLIDAY_NAME, SATURDAY_HOLIDAY_NAME, SUNDAY_HOLIDAY_NAME

_SATURDAY = 5
_SUNDAY = 6


def is_weekend(day: date | datetime) -> bool:
    return as_date(day).weekday() == _SUNDAY


def is_second_or_fourth_saturday(day: date | datetime) -> bool:
    d = as_date(day)
    if d.weekday() != _SATURDAY:
        return False
    return math.ceil(d.day / 7) in (2, 4)


def is_auto_holiday(day: date | datetime) -> bool:
    return is_weekend(day) or is_second_or_fourth_saturday(day)


def _contains_day(days: Iterable[date | datetime], day: date) -> bool:
    return any(as_date(d) == day for d in days)


def is_holiday(
    day: date | datetime,
    explicit_holidays: Iterable[date | datetime],
    excluded_auto_holidays: Iterable[date | datetime] = (),
) -> bool:
    """Resolve whether ``day`` is a holiday.

    An excluded auto-holiday is a class day even if it is also listed
    explicitly. Exclusions never cancel explicit (custom) holidays on
    non-auto days.
    """
    d = as_date(day)
    auto = is_auto_holiday(d)
    if auto and _contains_day(excluded_auto_holidays, d):
        return False
    return auto or _contains_day(explicit_holidays, d)


def get_holiday_name(day: date | datetime) -> str:
    if is_weekend(day):
        return SUNDAY_HOLIDAY_NAME
    if is_second_or_fourth_saturday(day):
        return SATURDAY_HOLIDAY_NAME
    return GENERIC_HOLIDAY_NAME


def resolve_holiday_name(day: date | datetime, holiday_names: Optional[Mapping[date, str]] = None) -> str:
    """Custom holiday names take precedence over the generic auto name."""
    d = as_date(day)
    if holiday_names:
        name = holiday_names.get(d)
        if name:
            return name
    return get_holiday_name(d)
