from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import DayAttendanceBand


@dataclass(frozen=True)
class AttendanceStats:
    """Read-model: always recomputed, never persisted."""

    total_units: float
    attended_units: float
    percentage: float
    required_units: int
    units_can_skip: float


@dataclass(frozen=True)
class SubjectAttendance:
    subject_id: str
    subject_name: str
    stats: AttendanceStats


@dataclass(frozen=True)
class SkipProjection:
    """Semester-wide projection.

    ``total_units_to_date`` / ``percentage`` describe editable sessions only,
    while ``required_units`` is measured against ``total_semester_units``.
    """

    total_units_to_date: float
    attended_units: float
    percentage: float
    total_semester_units: float
    required_units: int
    planned_skip_units: float
    planned_attend_units: float
    projected_total_attended: float
    units_can_skip: float


@dataclass(frozen=True)
class DaySummary:
    date: date
    attended_classes: int
    total_classes: int
    band: DayAttendanceBand


@dataclass(frozen=True)
class PlanSummary:
    future_days: int
    total_future_classes: int
    planned_skip_classes: int
    planned_skip_units: float
