from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def current_user_id() -> Optional[str]:
    """User id placed in the Flask session by the sign-in collaborator."""
    value = session.get("user_id")
    return str(value) if value is not None else None


def requested_today() -> Optional[date]:
    value = request.args.get("today")
    return parse_iso_date(value) if value else None


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object body")
    return data


def ok(data=None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def api_view(view):
    """Map domain errors to JSON responses (400/401/404, 500 for the rest)."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except AuthenticationError as e:
            return fail(str(e), 401)
        except NotFoundError as e:
            return fail(str(e), 404)
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return fail("Internal server error", 500)

    return wrapper
