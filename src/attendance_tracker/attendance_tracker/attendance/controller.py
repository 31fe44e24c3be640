from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.http import api_view, current_user_id, json_body, ok, requested_today
from ..container import Container
from ..core.exceptions import ValidationError


def _flag(data: dict, name: str) -> bool:
    value = data.get(name)
    if not isinstance(value, bool):
        raise ValidationError(f"'{name}' must be true or false")
    return value


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<session_id>", methods=["PUT"], endpoint="attendance_set")
    @api_view
    def attendance_set(session_id: str):
        attended = _flag(json_body(), "attended")
        container.attendance_service.set_attendance(user_id=current_user_id(), session_id=session_id, attended=attended)
        return ok({"id": session_id, "attended": attended})

    @app.route("/api/planned-skips/<session_id>", methods=["PUT"], endpoint="planned_skip_set")
    @api_view
    def planned_skip_set(session_id: str):
        planned_skip = _flag(json_body(), "planned_skip")
        container.attendance_service.set_planned_skip(
            user_id=current_user_id(), session_id=session_id, planned_skip=planned_skip
        )
        return ok({"id": session_id, "planned_skip": planned_skip})

    @app.route("/api/planned-skips", methods=["PATCH"], endpoint="planned_skips_batch")
    @api_view
    def planned_skips_batch():
        updates = json_body().get("updates")
        if not isinstance(updates, dict) or not all(isinstance(v, bool) for v in updates.values()):
            raise ValidationError("'updates' must map session ids to true/false")
        container.attendance_service.set_planned_skips(user_id=current_user_id(), updates=updates)
        return ok({"updated": len(updates)})

    @app.route("/api/planned-skips/days/<day>/toggle", methods=["POST"], endpoint="planned_skips_day_toggle")
    @api_view
    def planned_skips_day_toggle(day: str):
        value = container.attendance_service.toggle_day_skips(
            user_id=current_user_id(), day=parse_iso_date(day), today=requested_today()
        )
        return ok({"date": day, "planned_skip": value})

    @app.route("/api/home-days/<day>/toggle", methods=["POST"], endpoint="home_day_toggle")
    @api_view
    def home_day_toggle(day: str):
        value = container.attendance_service.toggle_home_day(user_id=current_user_id(), day=parse_iso_date(day))
        return ok({"date": day, "is_home_day": value})
