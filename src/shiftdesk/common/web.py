"""Flask helpers shared by the feature controllers."""
from __future__ import annotations

import dataclasses
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any, Iterable

from flask import jsonify, request, session

from ..core.enums import Role
from ..users.model import parse_roles

EXCLUDED_FIELDS = {"password_hash"}


def to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_jsonable(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.name not in EXCLUDED_FIELDS
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return value


def json_response(payload: Any, status: int = 200):
    return jsonify(to_jsonable(payload)), status


def payload() -> dict:
    """JSON body, falling back to form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def current_user_id() -> int:
    return int(session["user_id"])


def current_roles() -> tuple[Role, ...]:
    return parse_roles(session.get("roles") or [])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_response({"error": "Please sign in to continue"}, 401)
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role):
    """Allow the view when the signed-in user holds any of `roles`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_response({"error": "Please sign in to continue"}, 401)
            held: Iterable[Role] = current_roles()
            if not set(held) & set(roles):
                return json_response({"error": "You do not have access to this page"}, 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
