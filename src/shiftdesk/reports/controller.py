from __future__ import annotations

from datetime import date

from flask import Flask, Response, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import json_response, login_required, roles_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from ..workdays.accountant import DateRange
from .export import XLSX_MIMETYPE, export_filename, to_csv, to_xlsx
from .window import ReportingWindow


def _window_from_args() -> ReportingWindow:
    today = now_local().date()
    try:
        year = int(request.args.get("year") or today.year)
    except ValueError:
        raise ValidationError("Year must be a number")
    return ReportingWindow.parse(
        view=request.args.get("view", "month"),
        year=year,
        month=request.args.get("month") or str(today.month),
    )


def _date_arg(name: str) -> date:
    try:
        return parse_iso_date((request.args.get(name) or "").strip())
    except ValueError:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date")


def _attachment(body, *, mimetype: str, filename: str) -> Response:
    return Response(
        body,
        mimetype=mimetype,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/office/reports", methods=["GET"], endpoint="office_reports")
    @roles_required(Role.OFFICE)
    def office_reports():
        report = container.report_service.employee_report(_window_from_args())
        return json_response(
            {
                "window": {"label": report.window.label, "year": report.window.year, "month": report.window.month},
                "policy": container.aggregator.policy,
                "membership": container.aggregator.membership,
                "report": report,
            }
        )

    @app.route("/office/reports/vacation-tallies", methods=["GET"], endpoint="vacation_tallies")
    @roles_required(Role.OFFICE)
    def vacation_tallies():
        return json_response({"tallies": container.report_service.vacation_tallies(_window_from_args())})

    @app.route("/office/reports/export.csv", methods=["GET"], endpoint="export_report_csv")
    @roles_required(Role.OFFICE)
    def export_report_csv():
        report = container.report_service.employee_report(_window_from_args())
        return _attachment(to_csv(report), mimetype="text/csv; charset=utf-8", filename=export_filename(report, "csv"))

    @app.route("/office/reports/export.xlsx", methods=["GET"], endpoint="export_report_xlsx")
    @roles_required(Role.OFFICE)
    def export_report_xlsx():
        report = container.report_service.employee_report(_window_from_args())
        return _attachment(to_xlsx(report), mimetype=XLSX_MIMETYPE, filename=export_filename(report, "xlsx"))

    @app.route("/workdays/count", methods=["GET"], endpoint="count_workdays")
    @login_required
    def count_workdays():
        start, end = _date_arg("start"), _date_arg("end")
        clip = None
        if request.args.get("clip_start") or request.args.get("clip_end"):
            clip = DateRange(_date_arg("clip_start"), _date_arg("clip_end"))
        return json_response({"workdays": container.accountant.count_workdays(start, end, clip=clip)})

    @app.route("/workdays/check", methods=["GET"], endpoint="check_workday")
    @login_required
    def check_workday():
        day = _date_arg("date")
        return json_response({"date": day, "workday": container.accountant.is_workday(day)})
