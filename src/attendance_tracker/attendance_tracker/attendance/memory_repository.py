from __future__ import annotations

from threading import Lock
from typing import Mapping

from ..core.enums import OverrideKind
from .repository import OverrideRepository


class InMemoryOverrideRepository(OverrideRepository):
    def __init__(self):
        self._maps: dict[tuple[str, OverrideKind], dict[str, bool]] = {}
        self._lock = Lock()

    def get_map(self, user_id: str, kind: OverrideKind) -> dict[str, bool]:
        return dict(self._maps.get((user_id, kind), {}))

    def set_entry(self, user_id: str, kind: OverrideKind, key: str, value: bool) -> None:
        self.set_entries(user_id, kind, {key: value})

    def set_entries(self, user_id: str, kind: OverrideKind, entries: Mapping[str, bool]) -> None:
        with self._lock:
            self._maps.setdefault((user_id, kind), {}).update({str(k): bool(v) for k, v in entries.items()})
