from __future__ import annotations

from flask import Flask

from ..common.web import current_user_id, json_response, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/notifications", methods=["GET"], endpoint="notifications")
    @login_required
    def notifications():
        items = container.notification_service.unread_for(user_id=current_user_id())
        return json_response({"notifications": items, "unread_count": len(items)})

    @app.route("/notifications/<int:notification_id>/read", methods=["POST"], endpoint="mark_notification_read")
    @login_required
    def mark_notification_read(notification_id: int):
        container.notification_service.mark_read(user_id=current_user_id(), notification_id=notification_id)
        return json_response({"ok": True})
