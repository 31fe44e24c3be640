from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import Weekday


@dataclass(frozen=True)
class TimeSlot:
    """Recurring weekly position of a subject.

    ``duration`` is the total hours of the slot; when it spans several
    ``slot_numbers`` each generated session gets an equal share.
    """

    day: Weekday
    slot_numbers: tuple[int, ...]
    duration: float


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    slots: tuple[TimeSlot, ...] = ()


@dataclass(frozen=True)
class CustomHoliday:
    """User-declared holiday (never cancelled by auto-holiday exclusions)."""

    id: str
    date: date
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Semester:
    """Thực thể miền (domain): Học kỳ (Semester).

    Only ``custom_holidays`` and ``excluded_auto_holidays`` change after
    creation.
    """

    id: str
    start_date: date
    end_date: date
    subjects: tuple[Subject, ...] = ()
    holidays: tuple[date, ...] = ()
    custom_holidays: tuple[CustomHoliday, ...] = ()
    excluded_auto_holidays: tuple[date, ...] = field(default_factory=tuple)

    def all_holiday_dates(self) -> list[date]:
        """Explicit holidays with the custom ones folded in."""
        return [*self.holidays, *(h.date for h in self.custom_holidays)]

    def custom_holiday_names(self) -> dict[date, str]:
        return {h.date: h.name for h in self.custom_holidays}
