from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import now_local, to_local_date
from ..common.validators import require_non_empty, require_role
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_PENDING_LIMIT
from ..core.enums import RequestStatus, RequestType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..notifications.service import NotificationService
from ..users.repository import UserRepository
from ..workdays.accountant import DateRange
from .model import ScheduleEntry, ShiftRequest
from .repository import RequestRepository

logger = logging.getLogger(__name__)

_TYPE_LABELS = {
    RequestType.VACATION: "vacation",
    RequestType.EXTRA_SHIFT: "extra shift",
}


def _start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


class RequestService:
    """Use cases around the request lifecycle.

    pending -> approved | rejected (manager), pending | approved -> cancelled
    (owning employee, before the request starts).
    """

    def __init__(
        self,
        requests: RequestRepository,
        users: UserRepository,
        notifications: NotificationService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._requests = requests
        self._users = users
        self._notifications = notifications
        self._clock = clock

    def _assigned_manager_id(self) -> int:
        managers = self._users.list_users(role=Role.MANAGER)
        if not managers:
            raise ValidationError("No manager is available to review requests")
        return managers[0].user_id

    def _get(self, request_id: int) -> ShiftRequest:
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        return req

    def submit(
        self,
        *,
        current_roles: Iterable[Role],
        employee_id: int,
        request_type: RequestType,
        start_date: date,
        end_date: Optional[date] = None,
        project_name: str = "",
    ) -> int:
        require_role(current_roles, Role.EMPLOYEE)

        if request_type == RequestType.EXTRA_SHIFT:
            project = require_non_empty(project_name, "Project name")
            end_date = None
        else:
            project = None
            if end_date is not None and end_date < start_date:
                raise ValidationError("End date must not be before start date")

        manager_id = self._assigned_manager_id()
        request_id = self._requests.create(
            type=request_type,
            employee_id=int(employee_id),
            manager_id=manager_id,
            start_date=_start_of_day(start_date),
            end_date=_start_of_day(end_date) if end_date is not None else None,
            project_name=project,
        )
        logger.info("Request %s (%s) submitted by employee %s", request_id, request_type.value, employee_id)

        self._notifications.notify(
            user_id=manager_id,
            title="New request",
            message=f"A new {_TYPE_LABELS[request_type]} request is waiting for review",
            related_request_id=request_id,
        )
        return request_id

    def _decide(self, *, current_roles: Iterable[Role], request_id: int, status: RequestStatus, decided_by: str) -> None:
        require_role(current_roles, Role.MANAGER)

        req = self._get(request_id)
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been processed")

        ok = self._requests.update_status(
            request_id=req.request_id,
            status=status,
            expected=(RequestStatus.PENDING,),
            approved_by=decided_by if status == RequestStatus.APPROVED else None,
        )
        if not ok:
            raise ValidationError("Request has already been processed")
        logger.info("Request %s %s by %s", req.request_id, status.value, decided_by)

        self._notifications.notify(
            user_id=req.employee_id,
            title=f"Request {status.value}",
            message=f"Your {_TYPE_LABELS[req.type]} request has been {status.value}",
            related_request_id=req.request_id,
        )

    def approve(self, *, current_roles: Iterable[Role], request_id: int, decided_by: str) -> None:
        self._decide(current_roles=current_roles, request_id=request_id, status=RequestStatus.APPROVED, decided_by=decided_by)

    def reject(self, *, current_roles: Iterable[Role], request_id: int, decided_by: str) -> None:
        self._decide(current_roles=current_roles, request_id=request_id, status=RequestStatus.REJECTED, decided_by=decided_by)

    def cancel(self, *, current_user_id: int, request_id: int, now: Optional[datetime] = None) -> None:
        req = self._get(request_id)
        if req.employee_id != int(current_user_id):
            raise AuthorizationError("You can only cancel your own requests")
        if req.status not in (RequestStatus.PENDING, RequestStatus.APPROVED):
            raise ValidationError(f"A {req.status.value} request cannot be cancelled")

        start = req.start_date
        if start is None:
            raise ValidationError("Request has no start date")
        if not isinstance(start, datetime):
            start = _start_of_day(start)
        now = now or self._clock()
        if start.tzinfo is not None and now.tzinfo is None:
            now = now.astimezone()
        elif start.tzinfo is None and now.tzinfo is not None:
            now = now.replace(tzinfo=None)
        if start < now:
            raise ValidationError("Cannot cancel a request that has already started")

        ok = self._requests.update_status(
            request_id=req.request_id,
            status=RequestStatus.CANCELLED,
            expected=(RequestStatus.PENDING, RequestStatus.APPROVED),
        )
        if not ok:
            raise ValidationError("Request can no longer be cancelled")
        logger.info("Request %s cancelled by employee %s", req.request_id, current_user_id)

        if req.status == RequestStatus.APPROVED and req.manager_id:
            self._notifications.notify(
                user_id=req.manager_id,
                title="Request cancelled",
                message=f"A {_TYPE_LABELS[req.type]} request has been cancelled by the employee",
                related_request_id=req.request_id,
            )

    def list_for_employee(self, *, employee_id: int) -> Sequence[ShiftRequest]:
        return self._requests.list_requests(employee_id=int(employee_id))

    def list_pending(self, *, manager_id: Optional[int] = None) -> Sequence[ShiftRequest]:
        return self._requests.list_requests(
            status=RequestStatus.PENDING,
            manager_id=manager_id,
            limit=DEFAULT_PENDING_LIMIT,
        )

    def list_all(self, *, manager_id: Optional[int] = None) -> Sequence[ShiftRequest]:
        return self._requests.list_requests(manager_id=manager_id, limit=DEFAULT_LIST_LIMIT)

    def schedule_for_manager(
        self,
        *,
        manager_id: int,
        request_type: Optional[RequestType] = None,
        within: Optional[DateRange] = None,
    ) -> list[ScheduleEntry]:
        """Approved requests assigned to a manager, earliest start first.

        `within` keeps only requests starting inside that range (the month
        picker of the schedule page).
        """
        approved = self._requests.list_requests(status=RequestStatus.APPROVED, manager_id=int(manager_id))
        names = {u.user_id: u.display_name for u in self._users.list_users()}

        entries: list[ScheduleEntry] = []
        for req in approved:
            if request_type is not None and req.type != request_type:
                continue
            start = to_local_date(req.start_date)
            if start is None:
                continue
            if within is not None and not within.contains(start):
                continue
            entries.append(
                ScheduleEntry(
                    request_id=req.request_id,
                    employee_id=req.employee_id,
                    employee_name=names.get(req.employee_id, "Unknown employee"),
                    type=req.type,
                    start_date=start,
                    end_date=to_local_date(req.end_date),
                    project_name=req.project_name,
                )
            )
        entries.sort(key=lambda e: (e.start_date, e.request_id))
        return entries
