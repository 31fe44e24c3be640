from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import as_date, date_key, today_local
from ..core.enums import Weekday
from ..semesters.model import Semester, Subject
from .model import ClassSession, DaySchedule
from .rules import is_holiday, resolve_holiday_name


def session_id(subject_id: str, day: date | datetime, slot_number: int) -> str:
    """Deterministic id for ``(subject, calendar day, slot)``.

    Override maps are keyed by this id, so it must stay stable across
    regenerations.
    """
    return f"{subject_id}-{date_key(day)}-{int(slot_number)}"


def generate_day_schedule(
    day: date | datetime,
    subjects: Sequence[Subject],
    holidays: Iterable[date | datetime],
    excluded_auto_holidays: Iterable[date | datetime] = (),
    *,
    today: Optional[date] = None,
    holiday_names: Optional[Mapping[date, str]] = None,
) -> DaySchedule:
    d = as_date(day)
    today = as_date(today) if today else today_local()

    if is_holiday(d, holidays, excluded_auto_holidays):
        return DaySchedule(
            date=d,
            classes=(),
            is_holiday=True,
            holiday_name=resolve_holiday_name(d, holiday_names),
        )

    weekday = Weekday.from_date_index(d.weekday())
    can_edit = d <= today
    classes: list[ClassSession] = []

    for subject in subjects:
        for slot in subject.slots:
            if slot.day != weekday or not slot.slot_numbers:
                continue
            per_session = slot.duration / len(slot.slot_numbers)
            for slot_number in slot.slot_numbers:
                classes.append(
                    ClassSession(
                        id=session_id(subject.id, d, slot_number),
                        subject_id=subject.id,
                        subject_name=subject.name,
                        slot_number=slot_number,
                        duration=per_session,
                        attended=False,
                        can_edit=can_edit,
                    )
                )

    # Shared slot numbers across subjects are allowed; sort is stable.
    classes.sort(key=lambda c: c.slot_number)
    return DaySchedule(date=d, classes=tuple(classes), is_holiday=False)


def generate_schedule_for_period(
    start_date: date | datetime,
    end_date: date | datetime,
    subjects: Sequence[Subject],
    holidays: Iterable[date | datetime],
    excluded_auto_holidays: Iterable[date | datetime] = (),
    *,
    today: Optional[date] = None,
    holiday_names: Optional[Mapping[date, str]] = None,
) -> list[DaySchedule]:
    """One ``DaySchedule`` per day in ``[start_date, end_date]``.

    An inverted range yields an empty list; callers that treat it as an
    error must check explicitly.
    """
    today = as_date(today) if today else today_local()
    holidays = [as_date(h) for h in holidays]
    excluded = [as_date(h) for h in excluded_auto_holidays]

    out: list[DaySchedule] = []
    current = as_date(start_date)
    end = as_date(end_date)
    while current <= end:
        out.append(
            generate_day_schedule(
                current,
                subjects,
                holidays,
                excluded,
                today=today,
                holiday_names=holiday_names,
            )
        )
        current += timedelta(days=1)
    return out


def expand_semester(semester: Semester, *, today: Optional[date] = None) -> list[DaySchedule]:
    return generate_schedule_for_period(
        semester.start_date,
        semester.end_date,
        semester.subjects,
        semester.all_holiday_dates(),
        semester.excluded_auto_holidays,
        today=today,
        holiday_names=semester.custom_holiday_names(),
    )
