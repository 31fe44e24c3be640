from __future__ import annotations

from datetime import date

from attendance_tracker.core.enums import Weekday
from attendance_tracker.schedules.expander import generate_schedule_for_period
from attendance_tracker.schedules.overlay import materialize
from attendance_tracker.semesters.model import Subject, TimeSlot


def _raw():
    subject = Subject(
        id="s1",
        name="Maths",
        slots=(
            TimeSlot(day=Weekday.MON, slot_numbers=(1, 2), duration=2),
            TimeSlot(day=Weekday.WED, slot_numbers=(3,), duration=1),
        ),
    )
    return generate_schedule_for_period(date(2025, 1, 6), date(2025, 1, 12), [subject], [], today=date(2025, 1, 8))


def test_overlay_round_trip():
    raw = _raw()
    attendance = {"s1-2025-01-06-1": True, "s1-2025-01-06-2": False}
    skips = {"s1-2025-01-08-3": True}

    days = materialize(raw, attendance, skips, {})
    sessions = {c.id: c for d in days for c in d.classes}

    for sid, value in attendance.items():
        assert sessions[sid].attended is value
    for sid, value in skips.items():
        assert sessions[sid].planned_skip is value
    assert sessions["s1-2025-01-08-3"].attended is False
    assert sessions["s1-2025-01-06-1"].planned_skip is False


def test_home_days_keyed_by_local_date():
    days = materialize(_raw(), {}, {}, {"2025-01-07": True, "2025-01-09": False})
    flags = {d.date: d.is_home_day for d in days}

    assert flags[date(2025, 1, 7)] is True
    assert flags[date(2025, 1, 9)] is False
    assert flags[date(2025, 1, 6)] is False


def test_missing_maps_read_as_false_and_input_is_untouched():
    raw = _raw()
    raw_before = list(raw)

    days = materialize(raw, None, None, None)

    assert all(not c.attended and not c.planned_skip for d in days for c in d.classes)
    assert raw == raw_before


def test_overlay_is_recomputed_from_inputs_each_call():
    raw = _raw()
    first = materialize(raw, {"s1-2025-01-06-1": True}, {}, {})
    second = materialize(raw, {}, {}, {})

    assert first[0].classes[0].attended is True
    assert second[0].classes[0].attended is False
