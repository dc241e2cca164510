from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def notify(self, *, user_id: int, title: str, message: str, related_request_id: Optional[int] = None) -> int:
        notification_id = self._notifications.create(
            user_id=int(user_id),
            title=title,
            message=message,
            related_request_id=related_request_id,
        )
        logger.info("Notification %s queued for user %s: %s", notification_id, user_id, title)
        return notification_id

    def unread_for(self, *, user_id: int) -> Sequence[Notification]:
        return self._notifications.list_unread(user_id=int(user_id))

    def mark_read(self, *, user_id: int, notification_id: int) -> None:
        item = self._notifications.get(notification_id=int(notification_id))
        if not item:
            raise NotFoundError("Notification not found")
        if item.user_id != int(user_id):
            raise AuthorizationError("You can only update your own notifications")
        self._notifications.mark_read(notification_id=int(notification_id))
