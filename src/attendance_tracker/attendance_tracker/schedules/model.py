from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class ClassSession:
    """One scheduled occurrence of a subject at a date and slot number.

    ``can_edit`` is derived from the reference date at expansion time, not
    stored state.
    """

    id: str
    subject_id: str
    subject_name: str
    slot_number: int
    duration: float
    attended: bool
    can_edit: bool
    planned_skip: bool = False


@dataclass(frozen=True)
class DaySchedule:
    date: date
    classes: tuple[ClassSession, ...]
    is_holiday: bool
    holiday_name: Optional[str] = None
    is_home_day: bool = False
