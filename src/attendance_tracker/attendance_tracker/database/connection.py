from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict, filling local defaults."""
        return cls(
            host=str(raw.get("host", "localhost")),
            port=int(raw.get("port", 3306)),
            user=str(raw.get("user", "root")),
            password=str(raw.get("password", "")),
            database=str(raw.get("database", "attendance_tracker")),
        )


class DatabaseConnection:
    """Connection factory, one per distinct DBConfig.

    Every repository call opens a short-lived connection and closes it when
    the cursor block ends.
    """

    _instances: ClassVar[Dict[DBConfig, "DatabaseConnection"]] = {}

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if config not in cls._instances:
            cls._instances[config] = cls(config)
        return cls._instances[config]

    def connect(self, *, with_database: bool = True):
        kwargs = dict(
            host=self.config.host,
            port=self.config.port,
            user=self.config.user,
            password=self.config.password,
            charset="utf8mb4",
            use_pure=True,
        )
        if with_database:
            kwargs["database"] = self.config.database
        return mysql.connector.connect(**kwargs)
