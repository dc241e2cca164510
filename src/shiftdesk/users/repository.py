from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User; services depend on it, never on a concrete DB."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        email: str,
        name: str,
        password_hash: str,
        roles: Sequence[Role],
        phone_number: str = "",
    ) -> int:
        raise NotImplementedError

    def set_roles(self, user_id: int, roles: Sequence[Role]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, phone_number: str) -> bool:
        raise NotImplementedError
