from __future__ import annotations

import logging
from typing import Sequence

from ..core.exceptions import ReportUnavailableError
from ..requests.repository import RequestRepository
from ..users.repository import UserRepository
from .aggregation import EmployeeVacationTally, ReportData, VacationAggregator
from .window import ReportingWindow

logger = logging.getLogger(__name__)


class ReportService:
    """Fetches report inputs from the store and hands them to the aggregator."""

    def __init__(self, requests: RequestRepository, users: UserRepository, aggregator: VacationAggregator):
        self._requests = requests
        self._users = users
        self._aggregator = aggregator

    def _load(self):
        try:
            return list(self._requests.list_requests()), list(self._users.list_users())
        except Exception as exc:
            logger.exception("Fetching report data failed")
            raise ReportUnavailableError("Could not load report data, please try again later") from exc

    def employee_report(self, window: ReportingWindow) -> ReportData:
        requests, users = self._load()
        report = self._aggregator.build_report(requests, users, window)
        logger.info(
            "Built report %s: %d requests, %d employees",
            window.slug,
            report.total_requests,
            len(report.employee_stats),
        )
        return report

    def vacation_tallies(self, window: ReportingWindow) -> Sequence[EmployeeVacationTally]:
        requests, users = self._load()
        return self._aggregator.tally_vacation_days(requests, users, window)
