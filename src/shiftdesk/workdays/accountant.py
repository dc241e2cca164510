from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import AbstractSet, Iterator, Optional, Union

from ..common.datetime_utils import format_iso_date, to_local_date
from ..core.constants import WEEKEND_WEEKDAYS
from ..core.exceptions import ValidationError
from .holidays import EMPTY_CALENDAR, HolidayCalendar, holidays_for_year

DayLike = Union[date, datetime]


def as_day(value: DayLike, tz: Optional[tzinfo] = None) -> date:
    """Calendar day of `value`; aware instants are moved into `tz` first."""
    if isinstance(value, datetime):
        return to_local_date(value, tz)
    return value


@dataclass(frozen=True)
class DateRange:
    """Closed range of calendar days; `end` is inclusive.

    Instants are cut down to their day on construction, so a range runs from
    the start of `start` to the end of `end` whatever times were passed in.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_day(self.start))
        object.__setattr__(self, "end", as_day(self.end))
        if self.end < self.start:
            raise ValidationError("End date must not be before start date")

    @classmethod
    def of(cls, start: DayLike, end: DayLike, tz: Optional[tzinfo] = None) -> "DateRange":
        return cls(start=as_day(start, tz), end=as_day(end, tz))

    @classmethod
    def single(cls, day: DayLike) -> "DateRange":
        d = as_day(day)
        return cls(start=d, end=d)

    def contains(self, day: DayLike) -> bool:
        return self.start <= as_day(day) <= self.end

    def overlaps(self, other: "DateRange") -> bool:
        return self.start <= other.end and other.start <= self.end

    def intersect(self, other: "DateRange") -> Optional["DateRange"]:
        if not self.overlaps(other):
            return None
        return DateRange(start=max(self.start, other.start), end=min(self.end, other.end))

    def days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)


def is_workday(day: DayLike, holidays_for_year: AbstractSet[str]) -> bool:
    """Sunday-Thursday work week; listed holidays are off."""
    d = as_day(day)
    if d.weekday() in WEEKEND_WEEKDAYS:
        return False
    return format_iso_date(d) not in holidays_for_year


class WorkdayAccountant:
    """Counts business days over date ranges against a holiday calendar.

    Stateless apart from the immutable calendar and zone it was built with, so
    one instance can be shared between concurrent report requests.
    """

    def __init__(self, calendar: Optional[HolidayCalendar] = None, *, tz: Optional[tzinfo] = None):
        self._calendar = calendar if calendar is not None else EMPTY_CALENDAR
        self._tz = tz

    @property
    def calendar(self) -> HolidayCalendar:
        return self._calendar

    def holidays_for(self, year: int) -> AbstractSet[str]:
        return holidays_for_year(self._calendar, year)

    def is_workday(self, day: DayLike) -> bool:
        d = as_day(day, self._tz)
        return is_workday(d, self.holidays_for(d.year))

    def count_workdays(self, start: DayLike, end: DayLike, clip: Optional[DateRange] = None) -> int:
        """Workdays in [start, end], both inclusive, optionally inside `clip` only.

        Holidays are resolved by each day's own year, so ranges crossing New
        Year use both years' tables. A reversed range counts as empty.
        """
        first, last = as_day(start, self._tz), as_day(end, self._tz)
        if last < first:
            return 0

        span: Optional[DateRange] = DateRange(first, last)
        if clip is not None:
            span = span.intersect(clip)
        if span is None:
            return 0
        return sum(1 for day in span.days() if is_workday(day, self.holidays_for(day.year)))

    def count_range(self, date_range: DateRange, clip: Optional[DateRange] = None) -> int:
        return self.count_workdays(date_range.start, date_range.end, clip=clip)
