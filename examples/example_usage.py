"""Example: use the service layer directly (no Flask).

Prints this month's approved vacation workdays per employee.
"""

import importlib

from shiftdesk.common.datetime_utils import now_local
from shiftdesk.config import get_settings_module
from shiftdesk.container import build_container
from shiftdesk.reports.window import ReportingWindow


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    today = now_local()
    window = ReportingWindow.for_month(today.year, today.month)
    for tally in container.report_service.vacation_tallies(window):
        print(f"{tally.employee_id}: {tally.total_workdays}")


if __name__ == "__main__":
    main()
