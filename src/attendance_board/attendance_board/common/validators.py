from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, code: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(code)
    return value.strip()


def optional_text(value: Any) -> str | None:
    """Trimmed string, or None when the value is not a string."""
    if not isinstance(value, str):
        return None
    return value.strip()


def parse_member_id(value: Any, code: str = "bad_request") -> int:
    """Member ids arrive as JSON numbers or numeric strings."""
    if isinstance(value, bool):
        raise ValidationError(code)
    if isinstance(value, int):
        member_id = value
    elif isinstance(value, str) and value.strip().isdigit():
        member_id = int(value.strip())
    else:
        raise ValidationError(code)
    if member_id <= 0:
        raise ValidationError(code)
    return member_id


def json_object(payload: Any) -> dict:
    """Request JSON as a dict; a missing body reads as ``{}``.

    Arrays and scalars are rejected with ``bad_request``.
    """
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("bad_request")
    return payload
