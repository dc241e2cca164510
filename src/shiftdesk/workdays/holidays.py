"""Holiday calendars: year -> set of ISO dates that are not workdays.

Calendars are plain immutable values handed to the accountant, so tests and
deployments can supply their own without touching the default table.
"""
from __future__ import annotations

import json
import logging
from datetime import timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Union

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

HolidayCalendar = Mapping[int, frozenset]

EMPTY_CALENDAR: HolidayCalendar = MappingProxyType({})


def build_calendar(raw: Mapping[Any, Iterable[str]]) -> HolidayCalendar:
    """Normalize a loose mapping (str or int years, any iterable of dates).

    Every date is re-filed under its own year, so a misplaced entry still
    resolves correctly.
    """
    buckets: dict[int, set[str]] = {}
    for year_key, days in raw.items():
        try:
            int(year_key)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid holiday year: {year_key!r}")

        for value in days:
            try:
                day = parse_iso_date(str(value).strip())
            except ValueError:
                raise ValidationError(f"Invalid holiday date: {value!r}")
            buckets.setdefault(day.year, set()).add(format_iso_date(day))

    return MappingProxyType({year: frozenset(days) for year, days in buckets.items()})


def merge_calendars(*calendars: HolidayCalendar) -> HolidayCalendar:
    merged: dict[int, set[str]] = {}
    for calendar in calendars:
        for year, days in calendar.items():
            merged.setdefault(int(year), set()).update(days)
    return MappingProxyType({year: frozenset(days) for year, days in merged.items()})


def holidays_for_year(calendar: HolidayCalendar, year: int) -> frozenset:
    """Unconfigured years have no holidays; weekends still apply."""
    return calendar.get(int(year), frozenset())


def holidays_with_eves(calendar: HolidayCalendar) -> HolidayCalendar:
    """Extend a calendar so the day before every holiday is also off.

    Eves are derived with calendar-date arithmetic and filed under the eve's
    own year (the eve of 2025-01-01 lands in 2024).
    """
    extended: dict[int, set[str]] = {}
    for days in calendar.values():
        for value in days:
            holiday = parse_iso_date(value)
            eve = holiday - timedelta(days=1)
            extended.setdefault(holiday.year, set()).add(format_iso_date(holiday))
            extended.setdefault(eve.year, set()).add(format_iso_date(eve))

    return MappingProxyType({year: frozenset(days) for year, days in extended.items()})


def load_calendar(path: Union[str, Path]) -> HolidayCalendar:
    """Read a JSON object of the form {"2026": ["2026-04-02", ...]}."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, dict):
        raise ValidationError(f"Holiday file {p} must contain a JSON object")

    calendar = build_calendar(raw)
    logger.info("Loaded holiday calendar from %s (years=%s)", p, sorted(calendar))
    return calendar


DEFAULT_HOLIDAYS: HolidayCalendar = build_calendar(
    {
        2024: [
            "2024-04-23",  # Pesach 1
            "2024-04-24",  # Pesach 2
            "2024-04-29",  # Pesach 7
            "2024-04-30",  # Pesach 8
            "2024-06-12",  # Shavuot
            "2024-10-03",  # Rosh Hashanah 1
            "2024-10-04",  # Rosh Hashanah 2
            "2024-10-12",  # Yom Kippur
            "2024-10-17",  # Sukkot 1
            "2024-10-18",  # Sukkot 2
            "2024-10-24",  # Shemini Atzeret
            "2024-10-25",  # Simchat Torah
        ],
        2025: [
            "2025-04-13",  # Pesach 1
            "2025-04-14",  # Pesach 2
            "2025-04-19",  # Pesach 7
            "2025-04-20",  # Pesach 8
            "2025-06-02",  # Shavuot
            "2025-09-23",  # Rosh Hashanah 1
            "2025-09-24",  # Rosh Hashanah 2
            "2025-10-02",  # Yom Kippur
            "2025-10-07",  # Sukkot 1
            "2025-10-08",  # Sukkot 2
            "2025-10-14",  # Shemini Atzeret
            "2025-10-15",  # Simchat Torah
        ],
    }
)
