from __future__ import annotations

from ..core.exceptions import AuthenticationError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} must not be empty")
    return str(value).strip()


def require_positive(value: float, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return number


def require_user(user_id: str | None) -> str:
    """Reject mutations that arrive without a signed-in user."""
    if user_id is None or not str(user_id).strip():
        raise AuthenticationError("User not authenticated")
    return str(user_id).strip()
