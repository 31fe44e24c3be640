from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from ..common.datetime_utils import as_date, date_key, today_local
from ..common.validators import require_non_empty, require_user
from ..core.enums import OverrideKind
from ..core.exceptions import NotFoundError, ValidationError
from ..schedules.expander import generate_day_schedule
from ..semesters.repository import SemesterRepository
from .repository import OverrideRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: write attendance, planned-skip and home-day overrides.

    Every write targets a single key (or merges a batch of keys) of one
    sparse map; last writer wins per key.
    """

    def __init__(self, overrides: OverrideRepository, semesters: SemesterRepository):
        self._overrides = overrides
        self._semesters = semesters

    def set_attendance(self, *, user_id: Optional[str], session_id: str, attended: bool) -> None:
        user_id = require_user(user_id)
        session_id = require_non_empty(session_id, "Session id")
        self._overrides.set_entry(user_id, OverrideKind.ATTENDANCE, session_id, bool(attended))
        logger.info("Attendance %s=%s for user=%s", session_id, bool(attended), user_id)

    def set_planned_skip(self, *, user_id: Optional[str], session_id: str, planned_skip: bool) -> None:
        user_id = require_user(user_id)
        session_id = require_non_empty(session_id, "Session id")
        self._overrides.set_entry(user_id, OverrideKind.PLANNED_SKIP, session_id, bool(planned_skip))
        logger.info("Planned skip %s=%s for user=%s", session_id, bool(planned_skip), user_id)

    def set_planned_skips(self, *, user_id: Optional[str], updates: Mapping[str, bool]) -> None:
        user_id = require_user(user_id)
        entries = {require_non_empty(k, "Session id"): bool(v) for k, v in updates.items()}
        if not entries:
            return
        self._overrides.set_entries(user_id, OverrideKind.PLANNED_SKIP, entries)
        logger.info("Updated %d planned skips for user=%s", len(entries), user_id)

    def toggle_day_skips(self, *, user_id: Optional[str], day: date, today: Optional[date] = None) -> bool:
        """Skip every session of ``day``, or clear them if all are already skipped.

        Only days after ``today`` can be planned. Returns the new planned-skip value.
        """
        user_id = require_user(user_id)
        semester = self._semesters.get(user_id)
        if not semester:
            raise NotFoundError("No semester configured")

        day = as_date(day)
        today = as_date(today) if today else today_local()
        if day <= today:
            raise ValidationError(f"{day} is not in the future; record attendance instead")

        schedule = generate_day_schedule(
            day,
            semester.subjects,
            semester.all_holiday_dates(),
            semester.excluded_auto_holidays,
            today=today,
            holiday_names=semester.custom_holiday_names(),
        )
        current = self._overrides.get_map(user_id, OverrideKind.PLANNED_SKIP)
        ids = [c.id for c in schedule.classes]
        new_value = not (ids and all(current.get(i, False) for i in ids))
        self.set_planned_skips(user_id=user_id, updates={i: new_value for i in ids})
        return new_value

    def toggle_home_day(self, *, user_id: Optional[str], day: date) -> bool:
        user_id = require_user(user_id)
        key = date_key(day)
        new_value = not self._overrides.get_map(user_id, OverrideKind.HOME_DAY).get(key, False)
        self._overrides.set_entry(user_id, OverrideKind.HOME_DAY, key, new_value)
        logger.info("Home day %s=%s for user=%s", key, new_value, user_id)
        return new_value
