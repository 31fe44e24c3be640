from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import CustomHoliday, Semester


class SemesterRepository(Protocol):
    """Repository interface for the per-user semester definition.

    Note (DIP): services depend on this interface, not on a concrete store.
    Holiday overrides are written one entry at a time so concurrent edits of
    different holidays do not clobber each other.
    """

    def get(self, user_id: str) -> Optional[Semester]:
        raise NotImplementedError

    def save(self, user_id: str, semester: Semester) -> None:
        raise NotImplementedError

    def add_custom_holiday(self, user_id: str, holiday: CustomHoliday) -> None:
        raise NotImplementedError

    def remove_custom_holiday(self, user_id: str, holiday_id: str) -> bool:
        raise NotImplementedError

    def add_excluded_auto_holiday(self, user_id: str, day: date) -> None:
        raise NotImplementedError

    def remove_excluded_auto_holiday(self, user_id: str, day: date) -> bool:
        raise NotImplementedError
