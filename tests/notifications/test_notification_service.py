import pytest

from shiftdesk.core.exceptions import AuthorizationError, NotFoundError


def test_unread_lists_only_own_notifications(notification_service):
    notification_service.notify(user_id=1, title="Request approved", message="ok", related_request_id=5)
    notification_service.notify(user_id=2, title="Request rejected", message="no")

    unread = notification_service.unread_for(user_id=1)
    assert [(n.title, n.related_request_id) for n in unread] == [("Request approved", 5)]


def test_newest_first(notification_service):
    first = notification_service.notify(user_id=1, title="a", message="a")
    second = notification_service.notify(user_id=1, title="b", message="b")
    assert [n.notification_id for n in notification_service.unread_for(user_id=1)] == [second, first]


def test_mark_read(notification_service):
    nid = notification_service.notify(user_id=1, title="a", message="a")
    notification_service.mark_read(user_id=1, notification_id=nid)
    assert notification_service.unread_for(user_id=1) == []


def test_mark_read_checks_owner(notification_service):
    nid = notification_service.notify(user_id=1, title="a", message="a")
    with pytest.raises(AuthorizationError):
        notification_service.mark_read(user_id=2, notification_id=nid)
    with pytest.raises(NotFoundError):
        notification_service.mark_read(user_id=1, notification_id=999)
