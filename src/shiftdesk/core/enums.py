from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles a user can hold; a user may hold several at once."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    OFFICE = "office"


class RequestType(str, Enum):
    VACATION = "vacation"
    EXTRA_SHIFT = "extra_shift"


class RequestStatus(str, Enum):
    """Lifecycle of a request: pending, then exactly one terminal state."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class VacationTallyPolicy(str, Enum):
    """Which vacation requests feed the per-employee workday totals."""

    APPROVED_ONLY = "approved_only"
    NON_CANCELLED = "non_cancelled"


class WindowMembership(str, Enum):
    """How a request is attributed to a reporting window.

    OVERLAP: the request's date range overlaps the window; its days are
    clipped to the window before counting.
    CREATED_AT: the request was created inside the window; its whole range
    is counted.
    """

    OVERLAP = "overlap"
    CREATED_AT = "created_at"
