from datetime import date

import pytest

from shiftdesk.core.exceptions import ReportUnavailableError
from shiftdesk.reports.aggregation import VacationAggregator
from shiftdesk.reports.service import ReportService
from shiftdesk.reports.window import ReportingWindow
from shiftdesk.workdays.accountant import WorkdayAccountant
from shiftdesk.workdays.holidays import DEFAULT_HOLIDAYS


@pytest.fixture
def report_service(vacation, users_repo, requests_repo):
    requests_repo.add(
        vacation(1, 1, date(2025, 6, 1), date(2025, 6, 5)),
        vacation(2, 2, date(2025, 6, 8)),
    )
    service = ReportService(requests_repo, users_repo, VacationAggregator(WorkdayAccountant(DEFAULT_HOLIDAYS)))
    return service, requests_repo


def test_employee_report_reads_store(report_service):
    service, _ = report_service
    report = service.employee_report(ReportingWindow.for_month(2025, 6))

    assert report.total_requests == 2
    assert [s.vacation_tally for s in report.employee_stats] == [4, 1]


def test_vacation_tallies(report_service):
    service, _ = report_service
    tallies = service.vacation_tallies(ReportingWindow.for_month(2025, 7))
    assert [t.total_workdays for t in tallies] == [0, 0]


def test_store_failure_is_reported_as_unavailable(report_service, caplog):
    service, repo = report_service
    repo.fail_reads = True

    with pytest.raises(ReportUnavailableError):
        service.employee_report(ReportingWindow.for_month(2025, 6))
    with pytest.raises(ReportUnavailableError):
        service.vacation_tallies(ReportingWindow.full_year(2025))

    assert "Fetching report data failed" in caplog.text
