from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.attendance.memory_repository import InMemoryOverrideRepository
from attendance_tracker.core.enums import OverrideKind, Weekday
from attendance_tracker.core.exceptions import AuthenticationError, NotFoundError
from attendance_tracker.schedules.service import ScheduleService, recompute
from attendance_tracker.semesters.memory_repository import InMemorySemesterRepository
from attendance_tracker.semesters.model import Semester, Subject, TimeSlot

MATHS = Subject(id="m", name="Maths", slots=(TimeSlot(day=Weekday.MON, slot_numbers=(1, 2), duration=2),))
LAB = Subject(id="l", name="Lab", slots=(TimeSlot(day=Weekday.WED, slot_numbers=(1, 2, 3), duration=3),))

SEMESTER = Semester(
    id="u1",
    start_date=date(2025, 1, 6),
    end_date=date(2025, 1, 19),
    subjects=(MATHS, LAB),
)


def test_recompute_pipeline():
    attendance = {"m-2025-01-06-1": True, "m-2025-01-06-2": True, "l-2025-01-08-1": True}
    skips = {"l-2025-01-15-1": True, "l-2025-01-15-2": True}

    snap = recompute(SEMESTER, attendance, skips, {"2025-01-09": True}, today=date(2025, 1, 10))

    assert len(snap.schedule) == 14
    assert snap.schedule[3].is_home_day is True

    p = snap.projection
    assert p.total_semester_units == 10
    assert p.required_units == 8
    assert p.total_units_to_date == 5
    assert p.attended_units == 3
    assert p.planned_skip_units == 2
    assert p.planned_attend_units == 3
    assert p.projected_total_attended == 6
    assert p.units_can_skip == 0

    by_subject = {s.subject_id: s.stats for s in snap.subjects}
    assert by_subject["m"].total_units == 2
    assert by_subject["m"].attended_units == 2
    assert by_subject["l"].total_units == 3
    assert by_subject["l"].attended_units == 1

    assert snap.plan.future_days == 6
    assert snap.plan.total_future_classes == 5
    assert snap.plan.planned_skip_classes == 2


def test_recompute_is_referentially_transparent():
    a = recompute(SEMESTER, {"m-2025-01-06-1": True}, {}, {}, today=date(2025, 1, 10))
    b = recompute(SEMESTER, {"m-2025-01-06-1": True}, {}, {}, today=date(2025, 1, 10))

    assert a == b


def test_snapshot_reads_overrides_for_the_user():
    semesters = InMemorySemesterRepository()
    overrides = InMemoryOverrideRepository()
    semesters.save("u1", SEMESTER)
    overrides.set_entries("u1", OverrideKind.ATTENDANCE, {"m-2025-01-06-1": True})
    overrides.set_entries("u2", OverrideKind.ATTENDANCE, {"m-2025-01-06-2": True})

    svc = ScheduleService(semesters, overrides, required_percentage=50)
    snap = svc.snapshot("u1", today=date(2025, 1, 6))

    assert snap.projection.attended_units == 1
    assert snap.projection.required_units == 5
    assert snap.today == date(2025, 1, 6)


def test_snapshot_errors():
    svc = ScheduleService(InMemorySemesterRepository(), InMemoryOverrideRepository())

    with pytest.raises(AuthenticationError):
        svc.snapshot(None)
    with pytest.raises(NotFoundError):
        svc.snapshot("u1")
