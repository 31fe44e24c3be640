from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.http import api_view, current_user_id, json_body, ok, requested_today
from ..common.serializers import custom_holiday_from_dict, custom_holiday_to_dict, semester_to_dict, subject_from_dict
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/semester", methods=["GET"], endpoint="semester_get")
    @api_view
    def semester_get():
        return ok(semester_to_dict(container.semester_service.get(current_user_id())))

    @app.route("/api/semester", methods=["POST"], endpoint="semester_create")
    @api_view
    def semester_create():
        data = json_body()
        semester = container.semester_service.create_semester(
            user_id=current_user_id(),
            start_date=parse_iso_date(str(data.get("start_date") or "")),
            end_date=parse_iso_date(str(data.get("end_date") or "")),
            subjects=[subject_from_dict(s) for s in data.get("subjects") or []],
            holidays=[parse_iso_date(str(d)) for d in data.get("holidays") or []],
            custom_holidays=[custom_holiday_from_dict(h) for h in data.get("custom_holidays") or []],
            initial_ratios=data.get("initial_ratios"),
            today=requested_today(),
        )
        return ok(semester_to_dict(semester), 201)

    @app.route("/api/holidays", methods=["POST"], endpoint="holiday_add")
    @api_view
    def holiday_add():
        data = json_body()
        holiday = container.semester_service.add_custom_holiday(
            user_id=current_user_id(),
            day=parse_iso_date(str(data.get("date") or "")),
            name=str(data.get("name") or ""),
            description=data.get("description"),
        )
        return ok(custom_holiday_to_dict(holiday), 201)

    @app.route("/api/holidays/<holiday_id>", methods=["DELETE"], endpoint="holiday_remove")
    @api_view
    def holiday_remove(holiday_id: str):
        container.semester_service.remove_custom_holiday(user_id=current_user_id(), holiday_id=holiday_id)
        return ok()

    @app.route("/api/auto-holidays/<day>", methods=["PUT"], endpoint="auto_holiday_exclude")
    @api_view
    def auto_holiday_exclude(day: str):
        container.semester_service.exclude_auto_holiday(user_id=current_user_id(), day=parse_iso_date(day))
        return ok()

    @app.route("/api/auto-holidays/<day>", methods=["DELETE"], endpoint="auto_holiday_restore")
    @api_view
    def auto_holiday_restore(day: str):
        container.semester_service.restore_auto_holiday(user_id=current_user_id(), day=parse_iso_date(day))
        return ok()
