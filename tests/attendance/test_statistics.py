from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.attendance.statistics import (
    calculate_attendance_stats,
    format_percentage,
    get_subject_attendance,
    project_skips,
    summarize_day,
    summarize_plan,
)
from attendance_tracker.core.enums import DayAttendanceBand
from attendance_tracker.schedules.model import ClassSession, DaySchedule
from attendance_tracker.semesters.model import Subject


def _session(sid, *, subject="s1", duration=1.0, attended=False, can_edit=True, planned_skip=False):
    return ClassSession(
        id=sid,
        subject_id=subject,
        subject_name=subject.upper(),
        slot_number=1,
        duration=duration,
        attended=attended,
        can_edit=can_edit,
        planned_skip=planned_skip,
    )


def test_empty_session_set_is_zero_not_nan():
    stats = calculate_attendance_stats([])

    assert stats.percentage == 0
    assert stats.total_units == 0
    assert stats.required_units == 0
    assert stats.units_can_skip == 0


def test_stats_use_duration_units_and_ceiling():
    sessions = [
        _session("a", duration=2, attended=True),
        _session("b", duration=1, attended=True),
        _session("c", duration=1, attended=False),
        _session("d", duration=1, attended=True),
    ]

    stats = calculate_attendance_stats(sessions)

    assert stats.total_units == 5
    assert stats.attended_units == 4
    assert stats.percentage == pytest.approx(80.0)
    assert stats.required_units == 4  # ceil(3.75)
    assert stats.units_can_skip == 0


def test_units_can_skip_never_negative():
    sessions = [_session(str(i), attended=i < 2) for i in range(10)]
    stats = calculate_attendance_stats(sessions)

    assert stats.units_can_skip == 0
    assert 0 <= stats.percentage <= 100
    assert stats.attended_units <= stats.total_units


def test_custom_threshold():
    sessions = [_session(str(i), attended=True) for i in range(10)]
    stats = calculate_attendance_stats(sessions, required_percentage=60)

    assert stats.required_units == 6
    assert stats.units_can_skip == 4


def test_subject_stats_only_count_editable_sessions():
    subjects = [Subject(id="s1", name="S1"), Subject(id="s2", name="S2"), Subject(id="s3", name="S3")]
    sessions = [
        _session("p1", subject="s1", attended=True),
        _session("p2", subject="s1", attended=False),
        _session("f1", subject="s1", attended=True, can_edit=False),
        _session("p3", subject="s2", attended=True),
    ]

    result = get_subject_attendance(sessions, subjects)

    assert [r.subject_id for r in result] == ["s1", "s2", "s3"]
    assert result[0].stats.total_units == 2
    assert result[0].stats.attended_units == 1
    assert result[1].stats.percentage == pytest.approx(100.0)
    assert result[2].stats.total_units == 0
    assert result[2].stats.percentage == 0


def _projection_schedule():
    # 50 past units attended, 20 past units missed, 20 future to attend, 10 future planned skip.
    past = [_session(f"p{i}", attended=i < 50) for i in range(70)]
    future = [_session(f"f{i}", can_edit=False, planned_skip=i >= 20) for i in range(30)]
    return [
        DaySchedule(date=date(2025, 1, 6), classes=tuple(past), is_holiday=False),
        DaySchedule(date=date(2025, 3, 3), classes=tuple(future), is_holiday=False),
    ]


def test_skip_projection_scenario():
    p = project_skips(_projection_schedule())

    assert p.total_semester_units == 100
    assert p.required_units == 75
    assert p.attended_units == 50
    assert p.planned_attend_units == 20
    assert p.planned_skip_units == 10
    assert p.projected_total_attended == 70
    assert p.units_can_skip == 0
    assert p.total_units_to_date == 70
    assert p.percentage == pytest.approx(50 / 70 * 100)


def test_projection_uses_full_semester_denominator():
    past = [_session(f"p{i}", attended=True) for i in range(10)]
    future = [_session(f"f{i}", can_edit=False) for i in range(10)]
    schedule = [DaySchedule(date=date(2025, 1, 6), classes=tuple(past + future), is_holiday=False)]

    p = project_skips(schedule)

    assert p.required_units == 15
    assert p.projected_total_attended == 20
    assert p.units_can_skip == 5


def test_projection_of_empty_schedule():
    p = project_skips([])

    assert p.percentage == 0
    assert p.required_units == 0
    assert p.units_can_skip == 0


def test_format_percentage():
    assert format_percentage(80) == "80.00%"
    assert format_percentage(2 / 3 * 100) == "66.67%"
    assert format_percentage(0) == "0.00%"


@pytest.mark.parametrize(
    "attended,total,band",
    [
        (4, 4, DayAttendanceBand.FULL),
        (3, 4, DayAttendanceBand.GOOD),
        (1, 4, DayAttendanceBand.PARTIAL),
        (0, 4, DayAttendanceBand.NONE),
        (0, 0, DayAttendanceBand.NO_CLASSES),
    ],
)
def test_day_summary_bands(attended, total, band):
    classes = tuple(_session(str(i), attended=i < attended) for i in range(total))
    summary = summarize_day(DaySchedule(date=date(2025, 1, 6), classes=classes, is_holiday=False))

    assert summary.band == band
    assert summary.attended_classes == attended
    assert summary.total_classes == total


def test_day_summary_holiday():
    day = DaySchedule(date=date(2025, 1, 12), classes=(), is_holiday=True, holiday_name="Sunday")
    assert summarize_day(day).band == DayAttendanceBand.HOLIDAY


def test_plan_summary_counts_only_future_class_days():
    schedule = [
        DaySchedule(date=date(2025, 1, 8), classes=(_session("t", planned_skip=True),), is_holiday=False),
        DaySchedule(
            date=date(2025, 1, 9),
            classes=(_session("a", can_edit=False, planned_skip=True, duration=2), _session("b", can_edit=False)),
            is_holiday=False,
        ),
        DaySchedule(date=date(2025, 1, 12), classes=(), is_holiday=True, holiday_name="Sunday"),
    ]

    plan = summarize_plan(schedule, date(2025, 1, 8))

    assert plan.future_days == 1
    assert plan.total_future_classes == 2
    assert plan.planned_skip_classes == 1
    assert plan.planned_skip_units == 2
