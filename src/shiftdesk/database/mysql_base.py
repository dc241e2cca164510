from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_datetime(value: Any) -> Optional[datetime | date]:
    """Normalize DATETIME/DATE columns across connector implementations.

    mysql-connector can return:
    - datetime.datetime / datetime.date
    - string (e.g. '2025-06-01 00:00:00') with the pure-Python protocol
    - bytes for zero dates on some server modes

    Unparseable values come back as None; reporting treats those requests as
    contributing nothing.
    """

    if value is None:
        return None

    if isinstance(value, (datetime, date)):
        return value

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii", errors="ignore")

    if isinstance(value, str):
        text = value.strip()
        if not text or text.startswith("0000-00-00"):
            return None
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None

    return None
