from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo

from ..core.constants import ISO_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Settings carry a zone name; None/empty means the system local zone."""
    if not name:
        return None
    return ZoneInfo(name)


def to_local_date(value: Any, tz: Optional[tzinfo] = None) -> Optional[date]:
    """Calendar day of a stored instant, in `tz` (system local when None).

    Accepts date, datetime (naive values are already local wall time) and
    ISO strings. Anything else yields None so callers can skip it.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz) if tz is not None else value.astimezone()
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return to_local_date(datetime.fromisoformat(text), tz)
        except ValueError:
            return None

    return None
