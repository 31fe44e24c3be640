from __future__ import annotations

from dataclasses import replace
from datetime import date
from threading import Lock
from typing import Optional

from .model import CustomHoliday, Semester
from .repository import SemesterRepository


class InMemorySemesterRepository(SemesterRepository):
    """Process-local store used by tests and ``STORE_BACKEND=memory``."""

    def __init__(self):
        self._by_user: dict[str, Semester] = {}
        self._lock = Lock()

    def get(self, user_id: str) -> Optional[Semester]:
        return self._by_user.get(user_id)

    def save(self, user_id: str, semester: Semester) -> None:
        with self._lock:
            self._by_user[user_id] = semester

    def add_custom_holiday(self, user_id: str, holiday: CustomHoliday) -> None:
        with self._lock:
            sem = self._by_user[user_id]
            self._by_user[user_id] = replace(sem, custom_holidays=(*sem.custom_holidays, holiday))

    def remove_custom_holiday(self, user_id: str, holiday_id: str) -> bool:
        with self._lock:
            sem = self._by_user[user_id]
            kept = tuple(h for h in sem.custom_holidays if h.id != holiday_id)
            if len(kept) == len(sem.custom_holidays):
                return False
            self._by_user[user_id] = replace(sem, custom_holidays=kept)
            return True

    def add_excluded_auto_holiday(self, user_id: str, day: date) -> None:
        with self._lock:
            sem = self._by_user[user_id]
            if day not in sem.excluded_auto_holidays:
                self._by_user[user_id] = replace(sem, excluded_auto_holidays=(*sem.excluded_auto_holidays, day))

    def remove_excluded_auto_holiday(self, user_id: str, day: date) -> bool:
        with self._lock:
            sem = self._by_user[user_id]
            kept = tuple(d for d in sem.excluded_auto_holidays if d != day)
            if len(kept) == len(sem.excluded_auto_holidays):
                return False
            self._by_user[user_id] = replace(sem, excluded_auto_holidays=kept)
            return True
