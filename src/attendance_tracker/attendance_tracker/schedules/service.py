from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ..attendance.model import PlanSummary, SkipProjection, SubjectAttendance
from ..attendance.repository import OverrideRepository
from ..attendance.statistics import all_sessions, get_subject_attendance, project_skips, summarize_plan
from ..common.datetime_utils import today_local
from ..common.validators import require_user
from ..core.constants import DEFAULT_REQUIRED_PERCENTAGE
from ..core.enums import OverrideKind
from ..core.exceptions import NotFoundError
from ..semesters.model import Semester
from ..semesters.repository import SemesterRepository
from .expander import expand_semester
from .model import DaySchedule
from .overlay import materialize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SemesterSnapshot:
    """Everything the rendering collaborator reads; rebuilt on every call."""

    semester: Semester
    today: date
    schedule: list[DaySchedule]
    projection: SkipProjection
    subjects: list[SubjectAttendance]
    plan: PlanSummary


def recompute(
    semester: Semester,
    attendance_by_id: Optional[Mapping[str, bool]],
    planned_skip_by_id: Optional[Mapping[str, bool]],
    home_day_by_date_key: Optional[Mapping[str, bool]],
    *,
    today: date,
    required_percentage: float = DEFAULT_REQUIRED_PERCENTAGE,
) -> SemesterSnapshot:
    """Pure pipeline: expand -> overlay -> statistics."""
    schedule = materialize(
        expand_semester(semester, today=today),
        attendance_by_id,
        planned_skip_by_id,
        home_day_by_date_key,
    )
    return SemesterSnapshot(
        semester=semester,
        today=today,
        schedule=schedule,
        projection=project_skips(schedule, required_percentage),
        subjects=get_subject_attendance(all_sessions(schedule), semester.subjects, required_percentage),
        plan=summarize_plan(schedule, today),
    )


class ScheduleService:
    def __init__(
        self,
        semesters: SemesterRepository,
        overrides: OverrideRepository,
        *,
        required_percentage: float = DEFAULT_REQUIRED_PERCENTAGE,
    ):
        self._semesters = semesters
        self._overrides = overrides
        self._required_percentage = float(required_percentage)

    def snapshot(self, user_id: Optional[str], *, today: Optional[date] = None) -> SemesterSnapshot:
        user_id = require_user(user_id)
        semester = self._semesters.get(user_id)
        if not semester:
            raise NotFoundError("No semester configured")

        today = today or today_local()
        snap = recompute(
            semester,
            self._overrides.get_map(user_id, OverrideKind.ATTENDANCE),
            self._overrides.get_map(user_id, OverrideKind.PLANNED_SKIP),
            self._overrides.get_map(user_id, OverrideKind.HOME_DAY),
            today=today,
            required_percentage=self._required_percentage,
        )
        logger.debug("Recomputed %d days for user=%s (today=%s)", len(snap.schedule), user_id, today)
        return snap
