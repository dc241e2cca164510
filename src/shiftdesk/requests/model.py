from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import RequestStatus, RequestType

Instant = Union[datetime, date]


@dataclass(frozen=True)
class ShiftRequest:
    """A vacation or extra-shift request.

    `start_date`/`end_date` are kept as delivered by the store; they may be
    missing or malformed on legacy rows, which reporting tolerates. A request
    without `end_date` covers the single day of `start_date`.
    """

    request_id: int
    type: RequestType
    employee_id: int
    status: RequestStatus
    start_date: Optional[Instant]
    created_at: datetime
    end_date: Optional[Instant] = None
    updated_at: Optional[datetime] = None
    manager_id: Optional[int] = None
    project_name: Optional[str] = None
    approved_by: Optional[str] = None

    @property
    def is_single_day(self) -> bool:
        return self.end_date is None


@dataclass(frozen=True)
class ScheduleEntry:
    """One approved request on a manager's schedule."""

    request_id: int
    employee_id: int
    employee_name: str
    type: RequestType
    start_date: date
    end_date: Optional[date] = None
    project_name: Optional[str] = None
