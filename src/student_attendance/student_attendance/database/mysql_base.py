from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector

from ..app_logger import get_logger
from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = get_logger(__name__)

COUNTABLE_TABLES = frozenset({"students", "batches", "attendance_records"})


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, action: str = "database operation"):
    """Yield (conn, cursor) for one unit of work.

    Commits when the block finishes, rolls back on any error. Driver errors are
    logged and re-raised as StoreError so callers only deal with domain errors.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.exception("Error connecting for %s", action)
        raise StoreError(f"Could not connect to the database ({action})") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        logger.exception("Error during %s", action)
        raise StoreError(f"Database error during {action}: {e.msg if hasattr(e, 'msg') else e}") from e
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


def count_where(
    conn_factory: DatabaseConnection,
    table: str,
    where: Optional[str] = None,
    params: Sequence[Any] = (),
) -> int:
    """Server-side COUNT(*) with an optional parameterized predicate."""

    if table not in COUNTABLE_TABLES:
        raise ValueError(f"Unsupported table for count: {table!r}")

    sql = f"SELECT COUNT(*) AS n FROM {table}"
    if where:
        sql += f" WHERE {where}"

    with db_cursor(conn_factory, action=f"count {table}") as (_, cur):
        cur.execute(sql, tuple(params))
        row = fetchone(cur)
        return int(row["n"]) if row else 0


def normalize_mysql_date(value: Any) -> Optional[date]:
    """Normalize DATE values (date, datetime or 'YYYY-MM-DD' string)."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")


def normalize_mysql_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0.00")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
