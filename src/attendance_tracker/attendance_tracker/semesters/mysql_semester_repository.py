from __future__ import annotations

import json
from datetime import date
from typing import Optional

from ..common.serializers import subject_from_dict, subject_to_dict
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column, normalize_mysql_date
from .model import CustomHoliday, Semester
from .repository import SemesterRepository


class MySQLSemesterRepository(SemesterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str) -> Optional[Semester]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, semester_id, start_date, end_date, subjects_json, holidays_json
                FROM semesters
                WHERE user_id=%s
                """,
                (user_id,),
            )
            r = fetchone(cur)
            if not r:
                return None

            cur.execute(
                """
                SELECT holiday_id, holiday_date, name, description
                FROM custom_holidays
                WHERE user_id=%s
                ORDER BY holiday_date ASC, holiday_id ASC
                """,
                (user_id,),
            )
            custom = tuple(
                CustomHoliday(
                    id=str(h["holiday_id"]),
                    date=normalize_mysql_date(h["holiday_date"]),
                    name=h["name"],
                    description=h.get("description"),
                )
                for h in fetchall(cur)
            )

            cur.execute(
                "SELECT holiday_date FROM excluded_auto_holidays WHERE user_id=%s ORDER BY holiday_date ASC",
                (user_id,),
            )
            excluded = tuple(normalize_mysql_date(e["holiday_date"]) for e in fetchall(cur))

            return Semester(
                id=str(r["semester_id"]),
                start_date=normalize_mysql_date(r["start_date"]),
                end_date=normalize_mysql_date(r["end_date"]),
                subjects=tuple(subject_from_dict(s) for s in load_json_column(r["subjects_json"], [])),
                holidays=tuple(normalize_mysql_date(d) for d in load_json_column(r["holidays_json"], [])),
                custom_holidays=custom,
                excluded_auto_holidays=excluded,
            )

    def save(self, user_id: str, semester: Semester) -> None:
        subjects_json = json.dumps([subject_to_dict(s) for s in semester.subjects])
        holidays_json = json.dumps([d.isoformat() for d in semester.holidays])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO semesters(user_id, semester_id, start_date, end_date, subjects_json, holidays_json)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    semester_id=VALUES(semester_id),
                    start_date=VALUES(start_date),
                    end_date=VALUES(end_date),
                    subjects_json=VALUES(subjects_json),
                    holidays_json=VALUES(holidays_json)
                """,
                (user_id, semester.id, semester.start_date, semester.end_date, subjects_json, holidays_json),
            )

            # A (re)created semester starts from its own holiday overrides.
            cur.execute("DELETE FROM custom_holidays WHERE user_id=%s", (user_id,))
            cur.execute("DELETE FROM excluded_auto_holidays WHERE user_id=%s", (user_id,))
            for h in semester.custom_holidays:
                cur.execute(
                    "INSERT INTO custom_holidays(holiday_id, user_id, holiday_date, name, description) VALUES(%s,%s,%s,%s,%s)",
                    (h.id, user_id, h.date, h.name, h.description),
                )
            for d in semester.excluded_auto_holidays:
                cur.execute(
                    "INSERT IGNORE INTO excluded_auto_holidays(user_id, holiday_date) VALUES(%s,%s)",
                    (user_id, d),
                )

    def add_custom_holiday(self, user_id: str, holiday: CustomHoliday) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO custom_holidays(holiday_id, user_id, holiday_date, name, description) VALUES(%s,%s,%s,%s,%s)",
                (holiday.id, user_id, holiday.date, holiday.name, holiday.description),
            )

    def remove_custom_holiday(self, user_id: str, holiday_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM custom_holidays WHERE user_id=%s AND holiday_id=%s", (user_id, holiday_id))
            return cur.rowcount > 0

    def add_excluded_auto_holiday(self, user_id: str, day: date) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO excluded_auto_holidays(user_id, holiday_date) VALUES(%s,%s)",
                (user_id, day),
            )

    def remove_excluded_auto_holiday(self, user_id: str, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM excluded_auto_holidays WHERE user_id=%s AND holiday_date=%s", (user_id, day))
            return cur.rowcount > 0
