"""In-memory repositories and shared fixtures."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from shiftdesk.core.enums import RequestStatus, RequestType, Role
from shiftdesk.notifications.model import Notification
from shiftdesk.notifications.service import NotificationService
from shiftdesk.requests.model import ShiftRequest
from shiftdesk.users.model import User


class InMemoryUsers:
    def __init__(self, users=()):
        self._users: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self._users, default=0) + 1

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if u.email == email), None)

    def list_users(self, *, role=None):
        users = sorted(self._users.values(), key=lambda u: u.user_id)
        if role is None:
            return users
        return [u for u in users if role in u.roles]

    def create_user(self, *, email, name, password_hash, roles, phone_number=""):
        uid = self._next_id
        self._next_id += 1
        self._users[uid] = User(
            user_id=uid,
            email=email,
            name=name,
            password_hash=password_hash,
            roles=tuple(roles),
            phone_number=phone_number,
        )
        return uid

    def set_roles(self, user_id, roles):
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[int(user_id)] = User(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            password_hash=user.password_hash,
            roles=tuple(roles),
            phone_number=user.phone_number,
            is_active=user.is_active,
        )
        return True

    def update_profile(self, user_id, *, name, phone_number):
        user = self._users.get(int(user_id))
        if not user:
            return False
        self._users[int(user_id)] = User(
            user_id=user.user_id,
            email=user.email,
            name=name,
            password_hash=user.password_hash,
            roles=user.roles,
            phone_number=phone_number,
            is_active=user.is_active,
        )
        return True

    def delete_by_id(self, user_id):
        return self._users.pop(int(user_id), None) is not None


class InMemoryRequests:
    def __init__(self, requests=()):
        self._items: dict[int, ShiftRequest] = {r.request_id: r for r in requests}
        self._next_id = max(self._items, default=0) + 1
        self.fail_reads = False

    def add(self, *requests: ShiftRequest) -> None:
        for r in requests:
            self._items[r.request_id] = r
        self._next_id = max(self._items, default=0) + 1

    def create(self, *, type, employee_id, manager_id, start_date, end_date, project_name):
        rid = self._next_id
        self._next_id += 1
        self._items[rid] = ShiftRequest(
            request_id=rid,
            type=type,
            employee_id=int(employee_id),
            status=RequestStatus.PENDING,
            start_date=start_date,
            end_date=end_date,
            created_at=datetime(2025, 6, 1, 9, 0) + timedelta(minutes=rid),
            manager_id=manager_id,
            project_name=project_name,
        )
        return rid

    def get(self, *, request_id):
        return self._items.get(int(request_id))

    def list_requests(self, *, status=None, employee_id=None, manager_id=None, limit=None):
        if self.fail_reads:
            raise ConnectionError("store unavailable")
        items = [
            r
            for r in self._items.values()
            if (status is None or r.status == status)
            and (employee_id is None or r.employee_id == employee_id)
            and (manager_id is None or r.manager_id == manager_id)
        ]
        items.sort(key=lambda r: (r.created_at, r.request_id), reverse=True)
        return items[:limit] if limit is not None else items

    def update_status(self, *, request_id, status, expected, approved_by=None):
        req = self._items.get(int(request_id))
        if not req or req.status not in expected:
            return False
        self._items[int(request_id)] = ShiftRequest(
            request_id=req.request_id,
            type=req.type,
            employee_id=req.employee_id,
            status=status,
            start_date=req.start_date,
            end_date=req.end_date,
            created_at=req.created_at,
            updated_at=datetime(2025, 6, 2, 10, 0),
            manager_id=req.manager_id,
            project_name=req.project_name,
            approved_by=approved_by or req.approved_by,
        )
        return True


class InMemoryNotifications:
    def __init__(self):
        self._items: dict[int, Notification] = {}
        self._next_id = 1

    def create(self, *, user_id, title, message, related_request_id=None):
        nid = self._next_id
        self._next_id += 1
        self._items[nid] = Notification(
            notification_id=nid,
            user_id=int(user_id),
            title=title,
            message=message,
            created_at=datetime(2025, 6, 1, 12, nid % 60),
            related_request_id=related_request_id,
        )
        return nid

    def get(self, *, notification_id):
        return self._items.get(int(notification_id))

    def list_unread(self, *, user_id):
        items = [n for n in self._items.values() if n.user_id == int(user_id) and not n.read]
        items.sort(key=lambda n: (n.created_at, n.notification_id), reverse=True)
        return items

    def mark_read(self, *, notification_id):
        item = self._items.get(int(notification_id))
        if not item:
            return False
        self._items[int(notification_id)] = Notification(
            notification_id=item.notification_id,
            user_id=item.user_id,
            title=item.title,
            message=item.message,
            created_at=item.created_at,
            read=True,
            related_request_id=item.related_request_id,
        )
        return True

    def all(self):
        return list(self._items.values())


def make_user(user_id: int, name: str, *roles: Role, password: str = "secret123") -> User:
    return User(
        user_id=user_id,
        email=f"{name.lower()}@example.com",
        name=name,
        password_hash=generate_password_hash(password),
        roles=tuple(roles),
    )


@pytest.fixture
def staff():
    return [
        make_user(1, "Dana", Role.EMPLOYEE),
        make_user(2, "Yossi", Role.EMPLOYEE),
        make_user(3, "Miriam", Role.MANAGER),
        make_user(4, "Office", Role.OFFICE),
    ]


@pytest.fixture
def users_repo(staff):
    return InMemoryUsers(staff)


@pytest.fixture
def requests_repo():
    return InMemoryRequests()


@pytest.fixture
def notifications_repo():
    return InMemoryNotifications()


@pytest.fixture
def notification_service(notifications_repo):
    return NotificationService(notifications_repo)


@pytest.fixture
def vacation():
    """Factory for request rows as the store would deliver them."""

    def _make(
        request_id: int,
        employee_id: int,
        start,
        end=None,
        *,
        status: RequestStatus = RequestStatus.APPROVED,
        type: RequestType = RequestType.VACATION,
        created_at: datetime = datetime(2025, 6, 1, 9, 0),
    ) -> ShiftRequest:
        if isinstance(start, date) and not isinstance(start, datetime):
            start = datetime.combine(start, datetime.min.time())
        if isinstance(end, date) and not isinstance(end, datetime):
            end = datetime.combine(end, datetime.min.time())
        return ShiftRequest(
            request_id=request_id,
            type=type,
            employee_id=employee_id,
            status=status,
            start_date=start,
            end_date=end,
            created_at=created_at,
        )

    return _make
