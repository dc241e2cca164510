from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty, require_role
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    roles: tuple[Role, ...]


def landing_path(roles: Optional[Iterable[Role]]) -> str:
    """Home page for a signed-in user; managers win over employees."""
    if roles is None:
        return LOGIN_PATH
    held = set(roles)
    if Role.MANAGER in held:
        return "/manager"
    if Role.EMPLOYEE in held:
        return "/employee"
    return "/office"


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except (TypeError, ValueError):
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, name=user.display_name, roles=user.roles)


class UserService:
    """Use case: manage users and their roles (office staff)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _clean_roles(roles: Iterable[Role | str]) -> tuple[Role, ...]:
        out: list[Role] = []
        for r in roles:
            try:
                role = r if isinstance(r, Role) else Role(str(r).strip().lower())
            except ValueError:
                raise ValidationError(f"Unknown role: {r}")
            if role not in out:
                out.append(role)
        if not out:
            raise ValidationError("A user needs at least one role")
        return tuple(out)

    def list_users(self) -> Sequence[User]:
        return self._users.list_users()

    def list_by_role(self, role: Role) -> Sequence[User]:
        return self._users.list_users(role=role)

    def create_user(
        self,
        *,
        current_roles: Iterable[Role],
        email: str,
        name: str,
        password: str,
        roles: Iterable[Role | str] = (Role.EMPLOYEE,),
        phone_number: str = "",
    ) -> int:
        require_role(current_roles, Role.OFFICE)
        email = require_non_empty(email, "Email").lower()
        name = require_non_empty(name, "Name")
        require_min_length(password, "Password", 6)
        clean = self._clean_roles(roles)

        if self._users.get_by_email(email):
            raise ValidationError("A user with this email already exists")

        user_id = self._users.create_user(
            email=email,
            name=name,
            password_hash=generate_password_hash(password),
            roles=clean,
            phone_number=(phone_number or "").strip(),
        )
        logger.info("User %s created with roles %s", user_id, [r.value for r in clean])
        return user_id

    def update_roles(self, *, current_roles: Iterable[Role], user_id: int, roles: Iterable[Role | str]) -> None:
        require_role(current_roles, Role.OFFICE)
        clean = self._clean_roles(roles)

        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")
        if not self._users.set_roles(int(user_id), clean):
            raise ValidationError("Updating roles failed")
        logger.info("User %s roles set to %s", user_id, [r.value for r in clean])

    def delete_user(self, *, current_roles: Iterable[Role], current_user_id: int, user_id: int) -> None:
        require_role(current_roles, Role.OFFICE)
        if int(user_id) == int(current_user_id):
            raise ValidationError("You cannot delete your own account")
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")
        if not self._users.delete_by_id(int(user_id)):
            raise ValidationError("Deleting user failed")
        logger.info("User %s deleted", user_id)

    def update_profile(self, *, current_user_id: int, name: str, phone_number: str = "") -> User:
        """Users edit their own name and phone; email and roles stay with the office."""
        name = require_non_empty(name, "Name")
        if not self._users.update_profile(int(current_user_id), name=name, phone_number=(phone_number or "").strip()):
            raise NotFoundError("User not found")
        logger.info("User %s updated their profile", current_user_id)
        return self._users.get_by_id(int(current_user_id))
