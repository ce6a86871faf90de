from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StoreUnavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# ER_QUERY_TIMEOUT: statement killed by max_execution_time
_QUERY_TIMEOUT_ERRNO = 3024


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
    except (mysql.connector.InterfaceError, mysql.connector.OperationalError) as e:
        _safe_rollback(conn)
        logger.exception("MySQL operation failed")
        raise StoreUnavailable("Attendance store is unavailable") from e
    except mysql.connector.Error as e:
        _safe_rollback(conn)
        if e.errno == _QUERY_TIMEOUT_ERRNO:
            logger.exception("MySQL statement timed out")
            raise StoreUnavailable("Attendance store timed out") from e
        raise
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("Rollback failed on a broken connection")


def is_duplicate_key(error: Exception) -> bool:
    return isinstance(error, mysql.connector.IntegrityError) and error.errno == errorcode.ER_DUP_ENTRY


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def like_contains(value: str) -> str:
    """Build a LIKE pattern matching ``value`` literally as a substring."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
