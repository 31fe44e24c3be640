from __future__ import annotations

from flask import Flask

from ..common.http import api_view, current_user_id, ok, requested_today
from ..common.serializers import day_to_dict, plan_to_dict, projection_to_dict, subject_stats_to_dict
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedule", methods=["GET"], endpoint="schedule_get")
    @api_view
    def schedule_get():
        snap = container.schedule_service.snapshot(current_user_id(), today=requested_today())
        return ok(
            {
                "today": snap.today.isoformat(),
                "days": [day_to_dict(d) for d in snap.schedule],
            }
        )

    @app.route("/api/stats", methods=["GET"], endpoint="stats_get")
    @api_view
    def stats_get():
        snap = container.schedule_service.snapshot(current_user_id(), today=requested_today())
        return ok(
            {
                "today": snap.today.isoformat(),
                "overall": projection_to_dict(snap.projection),
                "subjects": [subject_stats_to_dict(s) for s in snap.subjects],
                "plan": plan_to_dict(snap.plan),
            }
        )
