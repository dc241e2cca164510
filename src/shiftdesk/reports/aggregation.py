"""Per-employee request statistics over a reporting window.

Everything here is a pure function of already-fetched requests and users:
no I/O, no shared mutable state. Malformed request dates never raise; the
request simply contributes nothing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, tzinfo
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import to_local_date
from ..core.constants import MONTH_LABELS
from ..core.enums import RequestStatus, RequestType, Role, VacationTallyPolicy, WindowMembership
from ..requests.model import ShiftRequest
from ..users.model import User
from ..workdays.accountant import DateRange, WorkdayAccountant
from .window import ReportingWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeVacationTally:
    employee_id: int
    total_workdays: int


@dataclass(frozen=True)
class StatusCounts:
    total: int = 0
    approved: int = 0
    rejected: int = 0


@dataclass(frozen=True)
class VacationBreakdown:
    request_id: int
    status: RequestStatus
    start: date
    end: date
    days: int


@dataclass(frozen=True)
class EmployeeStats:
    employee_id: int
    name: str
    total_requests: int
    extra_shifts: StatusCounts
    vacation_days: StatusCounts
    vacation_tally: int
    breakdown: tuple[VacationBreakdown, ...] = ()


@dataclass(frozen=True)
class MonthCounts:
    month: str
    approved: int = 0
    rejected: int = 0
    pending: int = 0


@dataclass(frozen=True)
class ReportData:
    window: ReportingWindow
    total_requests: int
    approved_requests: int
    rejected_requests: int
    pending_requests: int
    requests_by_type: dict[str, int] = field(default_factory=dict)
    requests_by_month: list[MonthCounts] = field(default_factory=list)
    employee_stats: list[EmployeeStats] = field(default_factory=list)


_TALLIED_STATUSES = {
    VacationTallyPolicy.APPROVED_ONLY: frozenset({RequestStatus.APPROVED}),
    VacationTallyPolicy.NON_CANCELLED: frozenset(
        {RequestStatus.PENDING, RequestStatus.APPROVED, RequestStatus.REJECTED}
    ),
}


class VacationAggregator:
    def __init__(
        self,
        accountant: WorkdayAccountant,
        *,
        policy: VacationTallyPolicy = VacationTallyPolicy.APPROVED_ONLY,
        membership: WindowMembership = WindowMembership.OVERLAP,
        tz: Optional[tzinfo] = None,
    ):
        self._accountant = accountant
        self._policy = policy
        self._membership = membership
        self._tz = tz

    @property
    def policy(self) -> VacationTallyPolicy:
        return self._policy

    @property
    def membership(self) -> WindowMembership:
        return self._membership

    def request_range(self, req: ShiftRequest) -> Optional[DateRange]:
        """Local calendar days a request covers, or None when unusable."""
        start = to_local_date(req.start_date, self._tz)
        if start is None:
            logger.debug("Request %s has no usable start date; skipped", req.request_id)
            return None

        end = to_local_date(req.end_date, self._tz) if req.end_date is not None else None
        if end is None:
            if req.end_date is not None:
                logger.debug("Request %s has a malformed end date; counted as single day", req.request_id)
            end = start
        if end < start:
            logger.debug("Request %s ends before it starts; skipped", req.request_id)
            return None
        return DateRange(start, end)

    def in_window(self, req: ShiftRequest, window: ReportingWindow) -> bool:
        if self._membership == WindowMembership.CREATED_AT:
            created = to_local_date(req.created_at, self._tz)
            return created is not None and window.date_range.contains(created)

        covered = self.request_range(req)
        return covered is not None and covered.overlaps(window.date_range)

    def workdays_for(self, req: ShiftRequest, window: Optional[ReportingWindow] = None) -> int:
        """Workdays a request consumes, clipped to the window under OVERLAP."""
        covered = self.request_range(req)
        if covered is None:
            return 0
        clip = None
        if window is not None and self._membership == WindowMembership.OVERLAP:
            clip = window.date_range
        return self._accountant.count_range(covered, clip=clip)

    def _window_requests(self, requests: Iterable[ShiftRequest], window: ReportingWindow) -> list[ShiftRequest]:
        return [r for r in requests if self.in_window(r, window)]

    def _tally(self, vacations: Iterable[ShiftRequest], window: ReportingWindow) -> int:
        counted = _TALLIED_STATUSES[self._policy]
        return sum(self.workdays_for(r, window) for r in vacations if r.status in counted)

    def tally_vacation_days(
        self,
        requests: Sequence[ShiftRequest],
        users: Sequence[User],
        window: ReportingWindow,
    ) -> list[EmployeeVacationTally]:
        scoped = [r for r in self._window_requests(requests, window) if r.type == RequestType.VACATION]
        out: list[EmployeeVacationTally] = []
        for user in users:
            if not user.has_role(Role.EMPLOYEE):
                continue
            mine = [r for r in scoped if r.employee_id == user.user_id]
            out.append(EmployeeVacationTally(employee_id=user.user_id, total_workdays=self._tally(mine, window)))
        return out

    def _employee_stats(self, user: User, scoped: Sequence[ShiftRequest], window: ReportingWindow) -> EmployeeStats:
        mine = [r for r in scoped if r.employee_id == user.user_id and r.status != RequestStatus.CANCELLED]
        shifts = [r for r in mine if r.type == RequestType.EXTRA_SHIFT]
        vacations = [r for r in mine if r.type == RequestType.VACATION]

        breakdown: list[VacationBreakdown] = []
        days_by_status = {RequestStatus.APPROVED: 0, RequestStatus.REJECTED: 0}
        total_days = 0
        for r in vacations:
            covered = self.request_range(r)
            if covered is None:
                continue
            days = self.workdays_for(r, window)
            total_days += days
            if r.status in days_by_status:
                days_by_status[r.status] += days
            breakdown.append(
                VacationBreakdown(request_id=r.request_id, status=r.status, start=covered.start, end=covered.end, days=days)
            )

        return EmployeeStats(
            employee_id=user.user_id,
            name=user.display_name,
            total_requests=len(mine),
            extra_shifts=StatusCounts(
                total=len(shifts),
                approved=sum(1 for r in shifts if r.status == RequestStatus.APPROVED),
                rejected=sum(1 for r in shifts if r.status == RequestStatus.REJECTED),
            ),
            vacation_days=StatusCounts(
                total=total_days,
                approved=days_by_status[RequestStatus.APPROVED],
                rejected=days_by_status[RequestStatus.REJECTED],
            ),
            vacation_tally=self._tally(vacations, window),
            breakdown=tuple(breakdown),
        )

    def _by_month(self, scoped: Sequence[ShiftRequest], window: ReportingWindow) -> list[MonthCounts]:
        buckets = [{"approved": 0, "rejected": 0, "pending": 0} for _ in MONTH_LABELS]
        for r in scoped:
            created = to_local_date(r.created_at, self._tz)
            if created is None or created.year != window.year:
                continue
            key = r.status.value
            if key in buckets[created.month - 1]:
                buckets[created.month - 1][key] += 1
        return [MonthCounts(month=label, **counts) for label, counts in zip(MONTH_LABELS, buckets)]

    def build_report(
        self,
        requests: Sequence[ShiftRequest],
        users: Sequence[User],
        window: ReportingWindow,
    ) -> ReportData:
        scoped = self._window_requests(requests, window)
        active = [r for r in scoped if r.status != RequestStatus.CANCELLED]

        by_type: dict[str, int] = {}
        for r in active:
            by_type[r.type.value] = by_type.get(r.type.value, 0) + 1

        employees = [u for u in users if u.has_role(Role.EMPLOYEE)]
        stats = [self._employee_stats(u, scoped, window) for u in employees]
        stats.sort(key=lambda s: s.total_requests, reverse=True)

        return ReportData(
            window=window,
            total_requests=len(active),
            approved_requests=sum(1 for r in scoped if r.status == RequestStatus.APPROVED),
            rejected_requests=sum(1 for r in scoped if r.status == RequestStatus.REJECTED),
            pending_requests=sum(1 for r in scoped if r.status == RequestStatus.PENDING),
            requests_by_type=by_type,
            requests_by_month=self._by_month(scoped, window),
            employee_stats=stats,
        )
