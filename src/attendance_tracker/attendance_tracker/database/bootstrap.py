from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Mapping

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

_CREATE_DB_RE = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_DB_RE = re.compile(r"(?im)^\s*USE\b.*?;\s*$")


def _strip_database_selection(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    return _USE_DB_RE.sub("", _CREATE_DB_RE.sub("", sql))


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema file on ``;``, ignoring ``--`` comment lines and quoted text."""
    buf: list[str] = []
    quote = ""
    escape = False

    body = "\n".join(ln for ln in sql.splitlines() if not ln.lstrip().startswith("--"))
    for ch in body:
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: Mapping) -> None:
    config = DBConfig.from_mapping(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> None:
    """Create the database if needed and run every statement of ``schema_path``.

    The schema uses ``CREATE TABLE IF NOT EXISTS`` so this is safe on every start.
    """
    config = DBConfig.from_mapping(db_config)
    ensure_database_exists(db_config)
    sql = _strip_database_selection(Path(schema_path).read_text(encoding="utf-8"))

    conn = DatabaseConnection(config).connect()
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s@%s/%s", config.user, config.host, config.database)


def list_tables(db_config: Mapping) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
