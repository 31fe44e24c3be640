from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import date_key
from .model import DaySchedule


def materialize(
    raw_schedule: Iterable[DaySchedule],
    attendance_by_id: Optional[Mapping[str, bool]],
    planned_skip_by_id: Optional[Mapping[str, bool]],
    home_day_by_date_key: Optional[Mapping[str, bool]],
) -> list[DaySchedule]:
    """Merge the three sparse override maps onto an expanded schedule.

    Missing maps or entries read as ``False``. Returns new objects; the input
    schedule is left untouched.
    """
    attendance_by_id = attendance_by_id or {}
    planned_skip_by_id = planned_skip_by_id or {}
    home_day_by_date_key = home_day_by_date_key or {}

    out: list[DaySchedule] = []
    for day in raw_schedule:
        classes = tuple(
            replace(
                cls,
                attended=bool(attendance_by_id.get(cls.id, False)),
                planned_skip=bool(planned_skip_by_id.get(cls.id, False)),
            )
            for cls in day.classes
        )
        out.append(
            replace(
                day,
                classes=classes,
                is_home_day=bool(home_day_by_date_key.get(date_key(day.date), False)),
            )
        )
    return out
