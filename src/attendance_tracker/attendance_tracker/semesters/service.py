from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Mapping, Optional, Sequence

from ..attendance.bootstrap import generate_initial_attendance
from ..attendance.repository import OverrideRepository
from ..common.datetime_utils import as_date, today_local
from ..common.validators import require_non_empty, require_positive, require_user
from ..core.enums import OverrideKind, Weekday
from ..core.exceptions import NotFoundError, ValidationError
from ..schedules.expander import expand_semester
from ..schedules.rules import is_auto_holiday
from .model import CustomHoliday, Semester, Subject, TimeSlot
from .repository import SemesterRepository

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class SemesterService:
    """Use case: create the semester and manage holiday overrides."""

    def __init__(self, semesters: SemesterRepository, overrides: OverrideRepository):
        self._semesters = semesters
        self._overrides = overrides

    def get(self, user_id: Optional[str]) -> Semester:
        return self._require_semester(require_user(user_id))

    def _require_semester(self, user_id: str) -> Semester:
        semester = self._semesters.get(user_id)
        if not semester:
            raise NotFoundError("No semester configured")
        return semester

    @staticmethod
    def _validate_slot(slot: TimeSlot, subject_name: str) -> TimeSlot:
        if not isinstance(slot.day, Weekday):
            raise ValidationError(f"{subject_name}: invalid slot day {slot.day!r}")
        numbers = tuple(int(n) for n in slot.slot_numbers)
        if not numbers:
            raise ValidationError(f"{subject_name}: slot needs at least one slot number")
        if any(n <= 0 for n in numbers):
            raise ValidationError(f"{subject_name}: slot numbers must be positive")
        if len(set(numbers)) != len(numbers):
            raise ValidationError(f"{subject_name}: slot numbers must be unique")
        duration = require_positive(slot.duration, f"{subject_name}: duration")
        return TimeSlot(day=slot.day, slot_numbers=numbers, duration=duration)

    def _validate_subject(self, subject: Subject) -> Subject:
        name = require_non_empty(subject.name, "Subject name")
        slots = tuple(self._validate_slot(s, name) for s in subject.slots)
        return Subject(id=(subject.id or "").strip() or _new_id(), name=name, slots=slots)

    @staticmethod
    def _validate_custom_holiday(holiday: CustomHoliday) -> CustomHoliday:
        return CustomHoliday(
            id=(holiday.id or "").strip() or _new_id(),
            date=as_date(holiday.date),
            name=require_non_empty(holiday.name, "Holiday name"),
            description=(holiday.description or "").strip() or None,
        )

    @staticmethod
    def _validate_ratios(raw) -> dict[str, dict[str, int]]:
        """Check ``{subject name: {"attended": n, "total": m}}`` with ``0 <= n <= m``."""
        if not isinstance(raw, Mapping):
            raise ValidationError("initial_ratios must map subject name to {attended, total}")
        ratios: dict[str, dict[str, int]] = {}
        for name, ratio in raw.items():
            if not isinstance(ratio, Mapping):
                raise ValidationError(f"{name}: ratio must be an object with attended and total")
            counts = {}
            for field in ("attended", "total"):
                value = ratio.get(field, 0)
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ValidationError(f"{name}: {field} must be a non-negative integer")
                counts[field] = value
            if counts["attended"] > counts["total"]:
                raise ValidationError(f"{name}: attended cannot exceed total")
            ratios[str(name)] = counts
        return ratios

    def create_semester(
        self,
        *,
        user_id: Optional[str],
        start_date: date,
        end_date: date,
        subjects: Sequence[Subject],
        holidays: Sequence[date] = (),
        custom_holidays: Sequence[CustomHoliday] = (),
        initial_ratios: Optional[Mapping[str, Mapping[str, int]]] = None,
        today: Optional[date] = None,
    ) -> Semester:
        user_id = require_user(user_id)
        start, end = as_date(start_date), as_date(end_date)
        if end < start:
            raise ValidationError("End date must not be before start date")

        validated = tuple(self._validate_subject(s) for s in subjects)
        ids = [s.id for s in validated]
        if len(set(ids)) != len(ids):
            raise ValidationError("Subject ids must be unique")

        holidays_custom = tuple(self._validate_custom_holiday(h) for h in custom_holidays)
        if len({h.id for h in holidays_custom}) != len(holidays_custom):
            raise ValidationError("Custom holiday ids must be unique")
        ratios = self._validate_ratios(initial_ratios) if initial_ratios is not None else None

        semester = Semester(
            id=user_id,
            start_date=start,
            end_date=end,
            subjects=validated,
            holidays=tuple(as_date(h) for h in holidays),
            custom_holidays=holidays_custom,
            excluded_auto_holidays=(),
        )
        self._semesters.save(user_id, semester)
        logger.info("Created semester for user=%s (%s..%s, %d subjects)", user_id, start, end, len(validated))

        if ratios is not None:
            today = today or today_local()
            seeded = generate_initial_attendance(expand_semester(semester, today=today), ratios, today=today)
            self._overrides.set_entries(user_id, OverrideKind.ATTENDANCE, seeded)
            logger.info("Seeded %d attendance entries for user=%s", len(seeded), user_id)

        return semester

    def add_custom_holiday(
        self,
        *,
        user_id: Optional[str],
        day: date,
        name: str,
        description: Optional[str] = None,
    ) -> CustomHoliday:
        user_id = require_user(user_id)
        self._require_semester(user_id)
        holiday = CustomHoliday(
            id=_new_id(),
            date=as_date(day),
            name=require_non_empty(name, "Holiday name"),
            description=(description or "").strip() or None,
        )
        self._semesters.add_custom_holiday(user_id, holiday)
        logger.info("Added custom holiday %s (%s) for user=%s", holiday.id, holiday.date, user_id)
        return holiday

    def remove_custom_holiday(self, *, user_id: Optional[str], holiday_id: str) -> None:
        user_id = require_user(user_id)
        self._require_semester(user_id)
        if not self._semesters.remove_custom_holiday(user_id, holiday_id):
            raise NotFoundError("Holiday not found")
        logger.info("Removed custom holiday %s for user=%s", holiday_id, user_id)

    def exclude_auto_holiday(self, *, user_id: Optional[str], day: date) -> None:
        """Turn an auto-detected holiday (Sunday, 2nd/4th Saturday) into a class day."""
        user_id = require_user(user_id)
        self._require_semester(user_id)
        day = as_date(day)
        if not is_auto_holiday(day):
            raise ValidationError(f"{day} is not an auto-detected holiday")
        self._semesters.add_excluded_auto_holiday(user_id, day)
        logger.info("Excluded auto holiday %s for user=%s", day, user_id)

    def restore_auto_holiday(self, *, user_id: Optional[str], day: date) -> None:
        user_id = require_user(user_id)
        self._require_semester(user_id)
        # Restoring a date that was never excluded is a no-op.
        if self._semesters.remove_excluded_auto_holiday(user_id, as_date(day)):
            logger.info("Restored auto holiday %s for user=%s", day, user_id)
