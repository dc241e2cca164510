from __future__ import annotations

from typing import Optional

from flask import Flask, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_roles, current_user_id, json_response, payload, roles_required
from ..core.enums import RequestType, Role
from ..core.exceptions import ValidationError
from ..container import Container
from ..reports.window import ReportingWindow


def _parse_date(value: Optional[str], field_name: str):
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def _parse_type(value: Optional[str]) -> RequestType:
    try:
        return RequestType((value or "").strip().lower())
    except ValueError:
        raise ValidationError("Request type must be 'vacation' or 'extra_shift'")


def _parse_month(value: Optional[str]) -> Optional[ReportingWindow]:
    """`YYYY-MM` as sent by a month picker; empty means no month filter."""
    text = (value or "").strip()
    if not text:
        return None
    try:
        year, month = text.split("-")
        return ReportingWindow.for_month(int(year), int(month))
    except ValueError:
        raise ValidationError("Month must be given as YYYY-MM")


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/requests", methods=["GET"], endpoint="my_requests")
    @roles_required(Role.EMPLOYEE)
    def my_requests():
        items = container.request_service.list_for_employee(employee_id=current_user_id())
        return json_response({"requests": items})

    @app.route("/employee/requests", methods=["POST"], endpoint="new_request")
    @roles_required(Role.EMPLOYEE)
    def new_request():
        data = payload()
        end_raw = data.get("end_date")
        request_id = container.request_service.submit(
            current_roles=current_roles(),
            employee_id=current_user_id(),
            request_type=_parse_type(data.get("type")),
            start_date=_parse_date(data.get("start_date"), "Start date"),
            end_date=_parse_date(end_raw, "End date") if end_raw else None,
            project_name=data.get("project_name", ""),
        )
        return json_response({"request_id": request_id}, 201)

    @app.route("/employee/requests/<int:request_id>/cancel", methods=["POST"], endpoint="cancel_request")
    @roles_required(Role.EMPLOYEE)
    def cancel_request(request_id: int):
        container.request_service.cancel(current_user_id=current_user_id(), request_id=request_id)
        return json_response({"ok": True})

    @app.route("/manager/requests", methods=["GET"], endpoint="pending_requests")
    @roles_required(Role.MANAGER)
    def pending_requests():
        return json_response({"requests": container.request_service.list_pending(manager_id=current_user_id())})

    @app.route("/manager/requests/all", methods=["GET"], endpoint="all_requests")
    @roles_required(Role.MANAGER)
    def all_requests():
        return json_response({"requests": container.request_service.list_all(manager_id=current_user_id())})

    @app.route("/manager/requests/<int:request_id>/approve", methods=["POST"], endpoint="approve_request")
    @roles_required(Role.MANAGER)
    def approve_request(request_id: int):
        container.request_service.approve(
            current_roles=current_roles(),
            request_id=request_id,
            decided_by=session.get("name") or "Manager",
        )
        return json_response({"ok": True})

    @app.route("/manager/requests/<int:request_id>/reject", methods=["POST"], endpoint="reject_request")
    @roles_required(Role.MANAGER)
    def reject_request(request_id: int):
        container.request_service.reject(
            current_roles=current_roles(),
            request_id=request_id,
            decided_by=session.get("name") or "Manager",
        )
        return json_response({"ok": True})

    @app.route("/manager/schedule", methods=["GET"], endpoint="manager_schedule")
    @roles_required(Role.MANAGER)
    def manager_schedule():
        raw_type = request.args.get("type")
        month = _parse_month(request.args.get("month"))
        entries = container.request_service.schedule_for_manager(
            manager_id=current_user_id(),
            request_type=_parse_type(raw_type) if raw_type else None,
            within=month.date_range if month else None,
        )
        return json_response({"schedule": entries})
