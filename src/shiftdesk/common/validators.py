from __future__ import annotations

from typing import Iterable

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_role(current_roles: Iterable[Role], role: Role) -> None:
    if role not in set(current_roles):
        raise AuthorizationError(f"The {role.value} role is required for this action")
