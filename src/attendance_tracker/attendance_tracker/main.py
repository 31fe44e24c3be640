from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .schedules.controller import register as register_schedules
from .semesters.controller import register as register_semesters

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = str(getattr(settings, "STORE_BACKEND", "mysql"))
    db_config = getattr(settings, "DB_CONFIG", None)
    required_percentage = float(getattr(settings, "REQUIRED_PERCENTAGE", 75))
    logger.info("settings=%s backend=%s required=%s%%", settings_module, backend, required_percentage)

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(db_config=db_config, backend=backend, required_percentage=required_percentage)
    app.extensions["attendance_tracker"] = container

    register_semesters(app, container)
    register_attendance(app, container)
    register_schedules(app, container)

    return app
