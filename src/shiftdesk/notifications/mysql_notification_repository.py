from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification
from .repository import NotificationRepository

_COLUMNS = "notification_id, user_id, title, message, is_read, related_request_id, created_at"


def _to_model(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["notification_id"]),
        user_id=int(r["user_id"]),
        title=r["title"],
        message=r["message"],
        created_at=r["created_at"],
        read=bool(r.get("is_read", 0)),
        related_request_id=int(r["related_request_id"]) if r.get("related_request_id") is not None else None,
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        title: str,
        message: str,
        related_request_id: Optional[int] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(user_id, title, message, related_request_id)
                VALUES(%s,%s,%s,%s)
                """,
                (int(user_id), title, message, related_request_id),
            )
            return int(cur.lastrowid)

    def get(self, *, notification_id: int) -> Optional[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM notifications WHERE notification_id=%s", (int(notification_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_unread(self, *, user_id: int) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM notifications
                WHERE user_id=%s AND is_read=0
                ORDER BY created_at DESC, notification_id DESC
                """,
                (int(user_id),),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def mark_read(self, *, notification_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE notifications SET is_read=1 WHERE notification_id=%s", (int(notification_id),))
            return cur.rowcount == 1
