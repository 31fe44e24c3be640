"""Plain-dict conversion for domain objects (JSON bodies, stored columns)."""

from __future__ import annotations

from typing import Any, Mapping

from ..attendance.model import AttendanceStats, DaySummary, PlanSummary, SkipProjection, SubjectAttendance
from ..attendance.statistics import format_percentage, summarize_day
from ..core.enums import Weekday
from ..core.exceptions import ValidationError
from ..schedules.model import ClassSession, DaySchedule
from ..semesters.model import CustomHoliday, Semester, Subject, TimeSlot
from .datetime_utils import date_key, parse_iso_date


def _require_object(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{what} must be a JSON object")
    return data


def slot_from_dict(data: Mapping[str, Any]) -> TimeSlot:
    data = _require_object(data, "Slot")
    try:
        day = Weekday(str(data.get("day", "")).upper())
    except ValueError:
        raise ValidationError(f"Invalid slot day: {data.get('day')!r}")
    try:
        numbers = tuple(int(n) for n in data.get("slot_numbers") or data.get("slotNumbers") or ())
        duration = float(data.get("duration", 0))
    except (TypeError, ValueError):
        raise ValidationError("Slot numbers and duration must be numeric")
    return TimeSlot(day=day, slot_numbers=numbers, duration=duration)


def subject_from_dict(data: Mapping[str, Any]) -> Subject:
    data = _require_object(data, "Subject")
    return Subject(
        id=str(data.get("id") or ""),
        name=str(data.get("name") or ""),
        slots=tuple(slot_from_dict(s) for s in data.get("slots") or ()),
    )


def subject_to_dict(subject: Subject) -> dict:
    return {
        "id": subject.id,
        "name": subject.name,
        "slots": [
            {"day": s.day.value, "slot_numbers": list(s.slot_numbers), "duration": s.duration}
            for s in subject.slots
        ],
    }


def custom_holiday_to_dict(holiday: CustomHoliday) -> dict:
    return {
        "id": holiday.id,
        "date": date_key(holiday.date),
        "name": holiday.name,
        "description": holiday.description,
    }


def custom_holiday_from_dict(data: Mapping[str, Any]) -> CustomHoliday:
    data = _require_object(data, "Custom holiday")
    return CustomHoliday(
        id=str(data.get("id") or ""),
        date=parse_iso_date(str(data.get("date") or "")),
        name=str(data.get("name") or ""),
        description=str(data.get("description") or "") or None,
    )


def semester_to_dict(semester: Semester) -> dict:
    return {
        "id": semester.id,
        "start_date": date_key(semester.start_date),
        "end_date": date_key(semester.end_date),
        "subjects": [subject_to_dict(s) for s in semester.subjects],
        "holidays": [date_key(d) for d in semester.holidays],
        "custom_holidays": [custom_holiday_to_dict(h) for h in semester.custom_holidays],
        "excluded_auto_holidays": [date_key(d) for d in semester.excluded_auto_holidays],
    }


def session_to_dict(cls: ClassSession) -> dict:
    return {
        "id": cls.id,
        "subject_id": cls.subject_id,
        "subject_name": cls.subject_name,
        "slot_number": cls.slot_number,
        "duration": cls.duration,
        "attended": cls.attended,
        "can_edit": cls.can_edit,
        "planned_skip": cls.planned_skip,
    }


def day_to_dict(day: DaySchedule) -> dict:
    summary: DaySummary = summarize_day(day)
    return {
        "date": date_key(day.date),
        "is_holiday": day.is_holiday,
        "holiday_name": day.holiday_name,
        "is_home_day": day.is_home_day,
        "classes": [session_to_dict(c) for c in day.classes],
        "attended_classes": summary.attended_classes,
        "total_classes": summary.total_classes,
        "band": summary.band.value,
    }


def stats_to_dict(stats: AttendanceStats) -> dict:
    return {
        "total_units": stats.total_units,
        "attended_units": stats.attended_units,
        "percentage": stats.percentage,
        "percentage_label": format_percentage(stats.percentage),
        "required_units": stats.required_units,
        "units_can_skip": stats.units_can_skip,
    }


def subject_stats_to_dict(item: SubjectAttendance) -> dict:
    return {"subject_id": item.subject_id, "subject_name": item.subject_name, "stats": stats_to_dict(item.stats)}


def projection_to_dict(p: SkipProjection) -> dict:
    return {
        "total_units": p.total_units_to_date,
        "attended_units": p.attended_units,
        "percentage": p.percentage,
        "percentage_label": format_percentage(p.percentage),
        "total_semester_units": p.total_semester_units,
        "required_units": p.required_units,
        "planned_skip_units": p.planned_skip_units,
        "planned_attend_units": p.planned_attend_units,
        "projected_total_attended": p.projected_total_attended,
        "units_can_skip": p.units_can_skip,
    }


def plan_to_dict(plan: PlanSummary) -> dict:
    return {
        "future_days": plan.future_days,
        "total_future_classes": plan.total_future_classes,
        "planned_skip_classes": plan.planned_skip_classes,
        "planned_skip_units": plan.planned_skip_units,
    }
