from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus, RequestType
from .model import ShiftRequest


class RequestRepository(Protocol):
    """Storage interface for requests; services depend on this, not on MySQL."""

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
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[ShiftRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        manager_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[ShiftRequest]:
        """Newest first (by created_at)."""

        raise NotImplementedError

    def update_status(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        expected: Sequence[RequestStatus],
        approved_by: Optional[str] = None,
    ) -> bool:
        """Compare-and-set: only moves the request if its status is in `expected`."""

        raise NotImplementedError
