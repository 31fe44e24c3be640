from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.attendance.memory_repository import InMemoryOverrideRepository
from attendance_tracker.attendance.service import AttendanceService
from attendance_tracker.core.enums import OverrideKind, Weekday
from attendance_tracker.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from attendance_tracker.semesters.memory_repository import InMemorySemesterRepository
from attendance_tracker.semesters.model import Semester, Subject, TimeSlot

TODAY = date(2025, 1, 8)


def _service(with_semester: bool = True):
    semesters = InMemorySemesterRepository()
    overrides = InMemoryOverrideRepository()
    if with_semester:
        subject = Subject(id="s1", name="Maths", slots=(TimeSlot(day=Weekday.MON, slot_numbers=(1, 2), duration=2),))
        semesters.save("u1", Semester(id="u1", start_date=date(2025, 1, 6), end_date=date(2025, 1, 31), subjects=(subject,)))
    return AttendanceService(overrides, semesters), overrides


def test_set_attendance_writes_single_key():
    svc, overrides = _service()

    svc.set_attendance(user_id="u1", session_id="s1-2025-01-06-1", attended=True)
    svc.set_attendance(user_id="u1", session_id="s1-2025-01-06-2", attended=True)
    svc.set_attendance(user_id="u1", session_id="s1-2025-01-06-1", attended=False)

    assert overrides.get_map("u1", OverrideKind.ATTENDANCE) == {
        "s1-2025-01-06-1": False,
        "s1-2025-01-06-2": True,
    }


def test_batch_planned_skips_merge_with_existing_entries():
    svc, overrides = _service()

    svc.set_planned_skip(user_id="u1", session_id="a", planned_skip=True)
    svc.set_planned_skips(user_id="u1", updates={"b": True, "c": False})

    assert overrides.get_map("u1", OverrideKind.PLANNED_SKIP) == {"a": True, "b": True, "c": False}


def test_maps_are_independent_per_user_and_kind():
    svc, overrides = _service()

    svc.set_attendance(user_id="u1", session_id="a", attended=True)
    svc.set_planned_skip(user_id="u2", session_id="a", planned_skip=True)

    assert overrides.get_map("u1", OverrideKind.PLANNED_SKIP) == {}
    assert overrides.get_map("u2", OverrideKind.ATTENDANCE) == {}


def test_toggle_home_day():
    svc, overrides = _service()

    assert svc.toggle_home_day(user_id="u1", day=date(2025, 1, 7)) is True
    assert overrides.get_map("u1", OverrideKind.HOME_DAY) == {"2025-01-07": True}
    assert svc.toggle_home_day(user_id="u1", day=date(2025, 1, 7)) is False
    assert overrides.get_map("u1", OverrideKind.HOME_DAY) == {"2025-01-07": False}


def test_toggle_day_skips_marks_then_clears_whole_day():
    svc, overrides = _service()

    assert svc.toggle_day_skips(user_id="u1", day=date(2025, 1, 13), today=TODAY) is True
    assert overrides.get_map("u1", OverrideKind.PLANNED_SKIP) == {"s1-2025-01-13-1": True, "s1-2025-01-13-2": True}

    assert svc.toggle_day_skips(user_id="u1", day=date(2025, 1, 13), today=TODAY) is False
    assert overrides.get_map("u1", OverrideKind.PLANNED_SKIP) == {"s1-2025-01-13-1": False, "s1-2025-01-13-2": False}


def test_toggle_day_skips_with_partial_selection_marks_all():
    svc, overrides = _service()
    svc.set_planned_skip(user_id="u1", session_id="s1-2025-01-13-1", planned_skip=True)

    assert svc.toggle_day_skips(user_id="u1", day=date(2025, 1, 13), today=TODAY) is True
    assert overrides.get_map("u1", OverrideKind.PLANNED_SKIP)["s1-2025-01-13-2"] is True


def test_toggle_day_skips_requires_semester():
    svc, _ = _service(with_semester=False)

    with pytest.raises(NotFoundError):
        svc.toggle_day_skips(user_id="u1", day=date(2025, 1, 13), today=TODAY)


@pytest.mark.parametrize("user_id", [None, "", "   "])
def test_unauthenticated_mutations_are_rejected(user_id):
    svc, overrides = _service()

    with pytest.raises(AuthenticationError):
        svc.set_attendance(user_id=user_id, session_id="a", attended=True)
    with pytest.raises(AuthenticationError):
        svc.set_planned_skips(user_id=user_id, updates={"a": True})
    with pytest.raises(AuthenticationError):
        svc.toggle_home_day(user_id=user_id, day=date(2025, 1, 7))


@pytest.mark.parametrize("day", [date(2025, 1, 6), date(2025, 1, 8)])
def test_toggle_day_skips_rejects_today_and_past(day):
    svc, overrides = _service()

    with pytest.raises(ValidationError):
        svc.toggle_day_skips(user_id="u1", day=day, today=TODAY)
    assert overrides.get_map("u1", OverrideKind.PLANNED_SKIP) == {}
