from datetime import date
import io

import pandas as pd
import pytest

from shiftdesk.reports.aggregation import VacationAggregator
from shiftdesk.reports.export import (
    BREAKDOWN_COLUMNS,
    EMPLOYEE_COLUMNS,
    breakdown_frame,
    export_filename,
    to_csv,
    to_xlsx,
)
from shiftdesk.reports.window import ReportingWindow
from shiftdesk.workdays.accountant import WorkdayAccountant
from shiftdesk.workdays.holidays import DEFAULT_HOLIDAYS


@pytest.fixture
def report(vacation, staff):
    requests = [
        vacation(1, 1, date(2025, 6, 1), date(2025, 6, 5)),
        vacation(2, 2, date(2025, 6, 9), date(2025, 6, 10)),
        vacation(3, 2, date(2025, 6, 11)),
    ]
    aggregator = VacationAggregator(WorkdayAccountant(DEFAULT_HOLIDAYS))
    return aggregator.build_report(requests, staff, ReportingWindow.for_month(2025, 6))


def test_csv_has_title_blank_line_and_table(report):
    lines = to_csv(report).split("\n")

    assert lines[0] == "Employee statistics - June 2025"
    assert lines[1] == ""
    assert lines[2] == ",".join(EMPLOYEE_COLUMNS)
    assert lines[3] == "Yossi,0,0,0,3"
    assert lines[4] == "Dana,0,0,0,4"


def test_filename_uses_window_slug(report):
    assert export_filename(report, "csv") == "employee-stats-june-2025.csv"
    assert export_filename(report, "xlsx") == "employee-stats-june-2025.xlsx"


def test_breakdown_lists_each_vacation(report):
    frame = breakdown_frame(report)
    assert list(frame.columns) == BREAKDOWN_COLUMNS
    assert len(frame) == 3
    assert frame.iloc[0]["Start"] == "2025-06-09"


def test_xlsx_workbook_has_both_sheets(report):
    data = to_xlsx(report)
    assert data[:2] == b"PK"

    sheets = pd.read_excel(io.BytesIO(data), sheet_name=None, engine="openpyxl")
    assert list(sheets) == ["Employees", "Vacation breakdown"]
    assert list(sheets["Employees"]["Employee name"]) == ["Yossi", "Dana"]
