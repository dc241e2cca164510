from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from ..workdays.accountant import DateRange


@dataclass(frozen=True)
class ReportingWindow:
    """A calendar month of a year, or the whole year (month is None)."""

    year: int
    month: Optional[int] = None

    def __post_init__(self) -> None:
        if self.month is not None and not 1 <= int(self.month) <= 12:
            raise ValidationError(f"Invalid month: {self.month}")

    @classmethod
    def for_month(cls, year: int, month: int) -> "ReportingWindow":
        return cls(year=int(year), month=int(month))

    @classmethod
    def full_year(cls, year: int) -> "ReportingWindow":
        return cls(year=int(year))

    @classmethod
    def parse(cls, *, view: str, year: int, month: Optional[str]) -> "ReportingWindow":
        """Build from request args: view is 'month' or 'year', month is 1-12."""
        view = (view or "month").strip().lower()
        if view == "year":
            return cls.full_year(year)
        if view != "month":
            raise ValidationError(f"Unknown report view: {view}")
        try:
            return cls.for_month(year, int(month or 0))
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid month: {month}")

    @property
    def is_full_year(self) -> bool:
        return self.month is None

    @property
    def date_range(self) -> DateRange:
        if self.month is None:
            return DateRange(date(self.year, 1, 1), date(self.year, 12, 31))
        last_day = calendar.monthrange(self.year, self.month)[1]
        return DateRange(date(self.year, self.month, 1), date(self.year, self.month, last_day))

    @property
    def label(self) -> str:
        if self.month is None:
            return f"Full year {self.year}"
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def slug(self) -> str:
        if self.month is None:
            return f"full-year-{self.year}"
        return f"{calendar.month_name[self.month].lower()}-{self.year}"
