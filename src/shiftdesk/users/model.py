from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..core.enums import Role


def parse_roles(value: Optional[Iterable[str] | str]) -> tuple[Role, ...]:
    """Roles are stored comma separated; unknown names are dropped."""
    if not value:
        return ()
    items = value.split(",") if isinstance(value, str) else value
    known = {r.value for r in Role}
    out: list[Role] = []
    for item in items:
        name = str(item).strip().lower()
        if name in known and Role(name) not in out:
            out.append(Role(name))
    return tuple(out)


def format_roles(roles: Iterable[Role]) -> str:
    return ",".join(r.value for r in roles)


@dataclass(frozen=True)
class User:
    """Domain entity: User. Plain data, no DB access."""

    user_id: int
    email: str
    name: str
    password_hash: str
    roles: tuple[Role, ...] = field(default_factory=tuple)
    phone_number: str = ""
    is_active: bool = True

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    @property
    def display_name(self) -> str:
        return self.name or self.email or "Unknown"
