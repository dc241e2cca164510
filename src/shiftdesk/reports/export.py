from __future__ import annotations

import io

import pandas as pd

from ..common.datetime_utils import format_iso_date
from .aggregation import ReportData

EMPLOYEE_COLUMNS = [
    "Employee name",
    "Total extra shifts",
    "Extra shifts approved",
    "Extra shifts rejected",
    "Total vacation days",
]

BREAKDOWN_COLUMNS = ["Employee name", "Request", "Status", "Start", "End", "Workdays"]

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def employee_frame(report: ReportData) -> pd.DataFrame:
    rows = [
        [
            s.name,
            s.extra_shifts.total,
            s.extra_shifts.approved,
            s.extra_shifts.rejected,
            s.vacation_tally,
        ]
        for s in report.employee_stats
    ]
    return pd.DataFrame(rows, columns=EMPLOYEE_COLUMNS)


def breakdown_frame(report: ReportData) -> pd.DataFrame:
    rows = [
        [s.name, b.request_id, b.status.value, format_iso_date(b.start), format_iso_date(b.end), b.days]
        for s in report.employee_stats
        for b in s.breakdown
    ]
    return pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)


def report_title(report: ReportData) -> str:
    return f"Employee statistics - {report.window.label}"


def export_filename(report: ReportData, extension: str) -> str:
    return f"employee-stats-{report.window.slug}.{extension}"


def to_csv(report: ReportData) -> str:
    """Title row, blank row, then the employee table."""
    buf = io.StringIO()
    buf.write(report_title(report) + "\n\n")
    employee_frame(report).to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue()


def to_xlsx(report: ReportData) -> bytes:
    # Write the workbook in memory (nothing touches the disk)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        employee_frame(report).to_excel(writer, index=False, sheet_name="Employees")
        breakdown_frame(report).to_excel(writer, index=False, sheet_name="Vacation breakdown")
    return output.getvalue()
