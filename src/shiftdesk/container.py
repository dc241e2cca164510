from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .common.datetime_utils import resolve_timezone
from .core.enums import VacationTallyPolicy, WindowMembership
from .database.connection import DatabaseConnection, DBConfig
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .reports.aggregation import VacationAggregator
from .reports.service import ReportService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.service import RequestService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService
from .workdays.accountant import WorkdayAccountant
from .workdays.holidays import DEFAULT_HOLIDAYS, holidays_with_eves, load_calendar, merge_calendars

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: Any
    requests_repo: Any
    notifications_repo: Any

    accountant: WorkdayAccountant
    aggregator: VacationAggregator

    auth_service: AuthService
    user_service: UserService
    request_service: RequestService
    notification_service: NotificationService
    report_service: ReportService


def build_accountant(
    *,
    holiday_calendar_path: str = "",
    include_eves: bool = False,
    timezone: str = "",
) -> WorkdayAccountant:
    calendar = DEFAULT_HOLIDAYS
    if holiday_calendar_path:
        calendar = merge_calendars(calendar, load_calendar(holiday_calendar_path))
    if include_eves:
        calendar = holidays_with_eves(calendar)
    return WorkdayAccountant(calendar, tz=resolve_timezone(timezone))


def build_aggregator(settings: Any, accountant: WorkdayAccountant) -> VacationAggregator:
    return VacationAggregator(
        accountant,
        policy=VacationTallyPolicy(getattr(settings, "VACATION_TALLY_POLICY", VacationTallyPolicy.APPROVED_ONLY.value)),
        membership=WindowMembership(getattr(settings, "WINDOW_MEMBERSHIP", WindowMembership.OVERLAP.value)),
        tz=resolve_timezone(getattr(settings, "TIMEZONE", "")),
    )


def wire(
    *,
    settings: Any,
    users_repo: Any,
    requests_repo: Any,
    notifications_repo: Any,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services on top of any repositories (MySQL or in-memory)."""
    accountant = build_accountant(
        holiday_calendar_path=getattr(settings, "HOLIDAY_CALENDAR_PATH", ""),
        include_eves=bool(getattr(settings, "HOLIDAYS_INCLUDE_EVES", False)),
        timezone=getattr(settings, "TIMEZONE", ""),
    )
    aggregator = build_aggregator(settings, accountant)

    notification_service = NotificationService(notifications_repo)
    logger.debug(
        "Reporting policy=%s membership=%s",
        aggregator.policy.value,
        aggregator.membership.value,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        requests_repo=requests_repo,
        notifications_repo=notifications_repo,
        accountant=accountant,
        aggregator=aggregator,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        request_service=RequestService(requests_repo, users_repo, notification_service),
        notification_service=notification_service,
        report_service=ReportService(requests_repo, users_repo, aggregator),
    )


def build_container(*, settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
    return wire(
        settings=settings,
        users_repo=MySQLUserRepository(conn),
        requests_repo=MySQLRequestRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        conn=conn,
    )
