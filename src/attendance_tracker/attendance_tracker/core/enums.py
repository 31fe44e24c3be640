from __future__ import annotations

from enum import Enum


class Weekday(str, Enum):
    """Days a recurring class slot may fall on (Sunday is always off)."""

    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"

    @classmethod
    def from_date_index(cls, weekday: int) -> "Weekday | None":
        """Map ``date.weekday()`` (Monday=0) to a slot day; Sunday -> None."""
        order = list(cls)
        return order[weekday] if weekday < len(order) else None


class OverrideKind(str, Enum):
    """Sparse override maps kept by the persistence collaborator."""

    ATTENDANCE = "attendance"
    PLANNED_SKIP = "planned_skip"
    HOME_DAY = "home_day"


class DayAttendanceBand(str, Enum):
    """Classification of a single day for calendar display."""

    HOLIDAY = "HOLIDAY"
    NO_CLASSES = "NO_CLASSES"
    FULL = "FULL"
    GOOD = "GOOD"
    PARTIAL = "PARTIAL"
    NONE = "NONE"
