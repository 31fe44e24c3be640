from __future__ import annotations

from typing import Mapping, Protocol

from ..core.enums import OverrideKind


class OverrideRepository(Protocol):
    """Sparse per-user key -> bool maps (attendance, planned skips, home days).

    Writes merge into the stored map key by key; they never replace the whole
    map, so concurrent writes to different keys survive.
    """

    def get_map(self, user_id: str, kind: OverrideKind) -> dict[str, bool]:
        raise NotImplementedError

    def set_entry(self, user_id: str, kind: OverrideKind, key: str, value: bool) -> None:
        raise NotImplementedError

    def set_entries(self, user_id: str, kind: OverrideKind, entries: Mapping[str, bool]) -> None:
        raise NotImplementedError
