"""Drive the service layer directly, without Flask or MySQL.

Controllers are thin; everything below is what they call.
"""

from datetime import date

from attendance_tracker.attendance.statistics import format_percentage
from attendance_tracker.container import build_memory_container
from attendance_tracker.semesters.model import Subject, TimeSlot
from attendance_tracker.core.enums import Weekday


def main():
    container = build_memory_container()
    today = date(2025, 1, 15)

    container.semester_service.create_semester(
        user_id="demo",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 2, 28),
        subjects=[
            Subject(id="maths", name="Maths", slots=(TimeSlot(Weekday.MON, (1, 2), 2.0),)),
            Subject(id="physics", name="Physics", slots=(TimeSlot(Weekday.WED, (3,), 1.0),)),
        ],
        initial_ratios={"Maths": {"attended": 1, "total": 2}},
        today=today,
    )
    container.attendance_service.toggle_day_skips(user_id="demo", day=date(2025, 1, 20), today=today)

    snap = container.schedule_service.snapshot("demo", today=today)
    p = snap.projection
    print(f"to date: {p.attended_units:g}/{p.total_units_to_date:g} ({format_percentage(p.percentage)})")
    print(f"semester: need {p.required_units:g} of {p.total_semester_units:g}, can still skip {p.units_can_skip:g}")
    for s in snap.subjects:
        print(f"  {s.subject_name}: {format_percentage(s.stats.percentage)}")


if __name__ == "__main__":
    main()
