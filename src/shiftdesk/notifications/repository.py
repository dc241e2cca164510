from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        title: str,
        message: str,
        related_request_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def get(self, *, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def list_unread(self, *, user_id: int) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    def mark_read(self, *, notification_id: int) -> bool:
        raise NotImplementedError
