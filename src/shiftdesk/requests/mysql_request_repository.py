from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import RequestStatus, RequestType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_datetime
from .model import ShiftRequest
from .repository import RequestRepository

_COLUMNS = """
    request_id, type, employee_id, manager_id, status, project_name,
    start_date, end_date, approved_by, created_at, updated_at
"""


def _to_model(r: dict) -> ShiftRequest:
    return ShiftRequest(
        request_id=int(r["request_id"]),
        type=RequestType(r["type"]),
        employee_id=int(r["employee_id"]),
        status=RequestStatus(r["status"]),
        start_date=normalize_mysql_datetime(r.get("start_date")),
        end_date=normalize_mysql_datetime(r.get("end_date")),
        created_at=r["created_at"],
        updated_at=r.get("updated_at"),
        manager_id=int(r["manager_id"]) if r.get("manager_id") is not None else None,
        project_name=r.get("project_name"),
        approved_by=r.get("approved_by"),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        type: RequestType,
        employee_id: int,
        manager_id: int,
        start_date: datetime,
        end_date: Optional[datetime],
        project_name: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO requests(type, employee_id, manager_id, status, project_name, start_date, end_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    type.value,
                    int(employee_id),
                    int(manager_id),
                    RequestStatus.PENDING.value,
                    project_name,
                    start_date,
                    end_date,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[ShiftRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        manager_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[ShiftRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if manager_id is not None:
            clauses.append("manager_id=%s")
            params.append(int(manager_id))

        sql = f"SELECT {_COLUMNS} FROM requests WHERE {' AND '.join(clauses)} ORDER BY created_at DESC, request_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_model(r) for r in fetchall(cur)]

    def update_status(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        expected: Sequence[RequestStatus],
        approved_by: Optional[str] = None,
    ) -> bool:
        placeholders = ",".join(["%s"] * len(expected))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE requests
                SET status=%s, approved_by=COALESCE(%s, approved_by), updated_at=NOW()
                WHERE request_id=%s AND status IN ({placeholders})
                """,
                (status.value, approved_by, int(request_id), *[s.value for s in expected]),
            )
            return cur.rowcount == 1
