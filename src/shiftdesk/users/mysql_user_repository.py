from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User, format_roles, parse_roles
from .repository import UserRepository

_COLUMNS = "user_id, email, name, password_hash, roles, phone_number, is_active"


def _to_model(r: dict) -> User:
    return User(
        user_id=int(r["user_id"]),
        email=r["email"],
        name=r.get("name") or "",
        password_hash=r["password_hash"],
        roles=parse_roles(r.get("roles")),
        phone_number=r.get("phone_number") or "",
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            if role is None:
                cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM users WHERE FIND_IN_SET(%s, roles) > 0 ORDER BY user_id",
                    (role.value,),
                )
            return [_to_model(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        email: str,
        name: str,
        password_hash: str,
        roles: Sequence[Role],
        phone_number: str = "",
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(email, name, password_hash, roles, phone_number)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (email, name, password_hash, format_roles(roles), phone_number),
            )
            return int(cur.lastrowid)

    def set_roles(self, user_id: int, roles: Sequence[Role]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE user_id=%s", (int(user_id),))
            if not fetchone(cur):
                return False
            # rowcount is 0 when the roles did not change, so existence is checked above
            cur.execute("UPDATE users SET roles=%s WHERE user_id=%s", (format_roles(roles), int(user_id)))
            return True

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount == 1

    def update_profile(self, user_id: int, *, name: str, phone_number: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE user_id=%s", (int(user_id),))
            if not fetchone(cur):
                return False
            cur.execute(
                "UPDATE users SET name=%s, phone_number=%s WHERE user_id=%s",
                (name, phone_number, int(user_id)),
            )
            return True
