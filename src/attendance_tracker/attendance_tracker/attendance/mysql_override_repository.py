from __future__ import annotations

from typing import Mapping

from ..core.enums import OverrideKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import OverrideRepository


class MySQLOverrideRepository(OverrideRepository):
    """Each map entry is its own row, so writes are per-key upserts."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_map(self, user_id: str, kind: OverrideKind) -> dict[str, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT entry_key, entry_value FROM overrides WHERE user_id=%s AND kind=%s",
                (user_id, kind.value),
            )
            return {str(r["entry_key"]): bool(r["entry_value"]) for r in fetchall(cur)}

    def set_entry(self, user_id: str, kind: OverrideKind, key: str, value: bool) -> None:
        self.set_entries(user_id, kind, {key: value})

    def set_entries(self, user_id: str, kind: OverrideKind, entries: Mapping[str, bool]) -> None:
        if not entries:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO overrides(user_id, kind, entry_key, entry_value)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE entry_value=VALUES(entry_value)
                """,
                [(user_id, kind.value, str(k), 1 if v else 0) for k, v in entries.items()],
            )
