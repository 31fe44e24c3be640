"""Attendance statistics and the semester-wide skip projection.

All figures are in units (hours of class duration). Two denominators exist
and must not be mixed: per-subject stats cover editable sessions only, while
the projection's required units are measured against the whole semester.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Iterable, Sequence

from ..core.constants import DEFAULT_REQUIRED_PERCENTAGE, GOOD_ATTENDANCE_RATE
from ..core.enums import DayAttendanceBand
from ..schedules.model import ClassSession, DaySchedule
from ..semesters.model import Subject
from .model import AttendanceStats, DaySummary, PlanSummary, SkipProjection, SubjectAttendance


def _units(sessions: Iterable[ClassSession]) -> float:
    return sum(s.duration for s in sessions)


def _required_units(total_units: float, required_percentage: float) -> int:
    return math.ceil(total_units * required_percentage / 100)


def all_sessions(schedule: Iterable[DaySchedule]) -> list[ClassSession]:
    return [cls for day in schedule for cls in day.classes]


def calculate_attendance_stats(
    sessions: Iterable[ClassSession],
    required_percentage: float = DEFAULT_REQUIRED_PERCENTAGE,
) -> AttendanceStats:
    sessions = list(sessions)
    total_units = _units(sessions)
    attended_units = _units(s for s in sessions if s.attended)

    percentage = attended_units / total_units * 100 if total_units > 0 else 0.0
    required_units = _required_units(total_units, required_percentage)

    return AttendanceStats(
        total_units=total_units,
        attended_units=attended_units,
        percentage=percentage,
        required_units=required_units,
        units_can_skip=max(0, attended_units - required_units),
    )


def get_subject_attendance(
    sessions: Iterable[ClassSession],
    subjects: Sequence[Subject],
    required_percentage: float = DEFAULT_REQUIRED_PERCENTAGE,
) -> list[SubjectAttendance]:
    """Per-subject stats over editable (to-date) sessions, in subject order."""
    by_subject: dict[str, list[ClassSession]] = {s.id: [] for s in subjects}
    for cls in sessions:
        if cls.can_edit and cls.subject_id in by_subject:
            by_subject[cls.subject_id].append(cls)

    return [
        SubjectAttendance(
            subject_id=subject.id,
            subject_name=subject.name,
            stats=calculate_attendance_stats(by_subject[subject.id], required_percentage),
        )
        for subject in subjects
    ]


def project_skips(
    schedule: Iterable[DaySchedule],
    required_percentage: float = DEFAULT_REQUIRED_PERCENTAGE,
) -> SkipProjection:
    """Project how many more future units may be skipped.

    Assumes every future session not marked as planned skip will be
    attended; ``units_can_skip`` is what remains on top of the planned skips.
    """
    sessions = all_sessions(schedule)
    past = [s for s in sessions if s.can_edit]
    future = [s for s in sessions if not s.can_edit]

    total_units_to_date = _units(past)
    attended_units = _units(s for s in past if s.attended)
    total_semester_units = _units(sessions)
    required_units = _required_units(total_semester_units, required_percentage)

    planned_skip_units = _units(s for s in future if s.planned_skip)
    planned_attend_units = _units(s for s in future if not s.planned_skip)
    projected_total_attended = attended_units + planned_attend_units

    return SkipProjection(
        total_units_to_date=total_units_to_date,
        attended_units=attended_units,
        percentage=attended_units / total_units_to_date * 100 if total_units_to_date > 0 else 0.0,
        total_semester_units=total_semester_units,
        required_units=required_units,
        planned_skip_units=planned_skip_units,
        planned_attend_units=planned_attend_units,
        projected_total_attended=projected_total_attended,
        units_can_skip=max(0, projected_total_attended - required_units),
    )


def format_percentage(percentage: float) -> str:
    return f"{percentage:.2f}%"


def summarize_day(day: DaySchedule) -> DaySummary:
    total = len(day.classes)
    attended = sum(1 for c in day.classes if c.attended)

    if day.is_holiday:
        band = DayAttendanceBand.HOLIDAY
    elif total == 0:
        band = DayAttendanceBand.NO_CLASSES
    else:
        rate = attended / total
        if rate == 1:
            band = DayAttendanceBand.FULL
        elif rate >= GOOD_ATTENDANCE_RATE:
            band = DayAttendanceBand.GOOD
        elif rate > 0:
            band = DayAttendanceBand.PARTIAL
        else:
            band = DayAttendanceBand.NONE

    return DaySummary(date=day.date, attended_classes=attended, total_classes=total, band=band)


def summarize_plan(schedule: Iterable[DaySchedule], today: date) -> PlanSummary:
    """Future (after ``today``) class days and how much of them is planned off."""
    future_days = [d for d in schedule if d.date > today and not d.is_holiday]
    future_sessions = all_sessions(future_days)
    skipped = [s for s in future_sessions if s.planned_skip]

    return PlanSummary(
        future_days=len(future_days),
        total_future_classes=len(future_sessions),
        planned_skip_classes=len(skipped),
        planned_skip_units=_units(skipped),
    )
