from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..core.constants import DATE_FORMAT
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside a single transaction.

    The transaction commits when the block exits normally and rolls back on
    any exception, which is re-raised unchanged.
    """

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


def placeholders(count: int) -> str:
    return ",".join(["%s"] * int(count))


def normalize_mysql_date(value: Any) -> date:
    """Normalize MySQL DATE values across connector implementations.

    mysql-connector returns DATE as datetime.date, but raw/pure modes and
    some proxies hand back 'YYYY-MM-DD' strings.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], DATE_FORMAT).date()
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
