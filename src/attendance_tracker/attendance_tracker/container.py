from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.memory_repository import InMemoryOverrideRepository
from .attendance.mysql_override_repository import MySQLOverrideRepository
from .attendance.repository import OverrideRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_REQUIRED_PERCENTAGE
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .schedules.service import ScheduleService
from .semesters.memory_repository import InMemorySemesterRepository
from .semesters.mysql_semester_repository import MySQLSemesterRepository
from .semesters.repository import SemesterRepository
from .semesters.service import SemesterService


@dataclass(frozen=True)
class Container:
    semesters_repo: SemesterRepository
    overrides_repo: OverrideRepository

    semester_service: SemesterService
    attendance_service: AttendanceService
    schedule_service: ScheduleService


def _wire(
    semesters_repo: SemesterRepository,
    overrides_repo: OverrideRepository,
    *,
    required_percentage: float,
) -> Container:
    return Container(
        semesters_repo=semesters_repo,
        overrides_repo=overrides_repo,
        semester_service=SemesterService(semesters_repo, overrides_repo),
        attendance_service=AttendanceService(overrides_repo, semesters_repo),
        schedule_service=ScheduleService(semesters_repo, overrides_repo, required_percentage=required_percentage),
    )


def build_memory_container(*, required_percentage: float = DEFAULT_REQUIRED_PERCENTAGE) -> Container:
    return _wire(InMemorySemesterRepository(), InMemoryOverrideRepository(), required_percentage=required_percentage)


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = "mysql",
    required_percentage: float = DEFAULT_REQUIRED_PERCENTAGE,
) -> Container:
    backend = (backend or "mysql").lower()
    if backend == "memory":
        return build_memory_container(required_percentage=required_percentage)
    if backend != "mysql":
        raise ValidationError(f"Unknown store backend: {backend}")
    if not db_config:
        raise ValidationError("DB_CONFIG is required for the mysql backend")

    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return _wire(MySQLSemesterRepository(conn), MySQLOverrideRepository(conn), required_percentage=required_percentage)
