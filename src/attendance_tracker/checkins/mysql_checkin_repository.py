from __future__ import annotations

import logging
from typing import Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, like_contains
from .model import CheckIn, CheckInQuery
from .repository import CheckInRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    checkin_id, student_id, session_code, course_code, course_name, lecturer,
    centre, location, checked_in_at, client_timestamp, qr_raw
"""


def _to_checkin(r: dict) -> CheckIn:
    return CheckIn(
        checkin_id=int(r["checkin_id"]),
        student_id=r["student_id"],
        session_code=r["session_code"],
        course_code=r.get("course_code"),
        course_name=r.get("course_name"),
        lecturer=r.get("lecturer"),
        centre=r.get("centre"),
        location=r.get("location"),
        timestamp=r["checked_in_at"],
        client_timestamp=r.get("client_timestamp"),
        qr_raw=r.get("qr_raw"),
    )


def _where(query: CheckInQuery) -> tuple[str, tuple]:
    clauses = ["1=1"]
    params: list[object] = []

    if query.course_code:
        clauses.append("LOWER(course_code) LIKE LOWER(%s)")
        params.append(like_contains(query.course_code))
    if query.session_code:
        clauses.append("LOWER(session_code) LIKE LOWER(%s)")
        params.append(like_contains(query.session_code))
    if query.start is not None:
        clauses.append("checked_in_at >= %s")
        params.append(query.start)
    if query.end is not None:
        clauses.append("checked_in_at < %s")
        params.append(query.end)

    return " AND ".join(clauses), tuple(params)


class MySQLCheckInRepository(CheckInRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_if_absent(self, entry: CheckIn) -> tuple[CheckIn, bool]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_checkins(
                        student_id, session_code, course_code, course_name, lecturer,
                        centre, location, checked_in_at, client_timestamp, qr_raw
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        entry.student_id,
                        entry.session_code,
                        entry.course_code,
                        entry.course_name,
                        entry.lecturer,
                        entry.centre,
                        entry.location,
                        entry.timestamp,
                        entry.client_timestamp,
                        entry.qr_raw,
                    ),
                )
                return entry.with_id(int(cur.lastrowid)), True
            except mysql.connector.IntegrityError as e:
                if not is_duplicate_key(e):
                    raise

            # The unique key rejected us, so the winning row is committed.
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_checkins WHERE session_code=%s AND student_id=%s",
                (entry.session_code, entry.student_id),
            )
            existing = fetchone(cur)
            if not existing:
                raise RuntimeError(
                    f"Duplicate check-in for {entry.session_code}/{entry.student_id} reported but row not readable"
                )
            return _to_checkin(existing), False

    def search(self, query: CheckInQuery, *, offset: int, limit: int) -> tuple[Sequence[CheckIn], int]:
        where, params = _where(query)

        # Both statements run in one transaction, so the count and the page
        # come from the same InnoDB snapshot.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM attendance_checkins WHERE {where}", params)
            total = int((fetchone(cur) or {}).get("total") or 0)

            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_checkins
                WHERE {where}
                ORDER BY checked_in_at DESC, checkin_id DESC
                LIMIT %s OFFSET %s
                """,
                params + (int(limit), int(offset)),
            )
            rows = [_to_checkin(r) for r in fetchall(cur)]

        logger.debug("Check-in search %s -> %d/%d rows", query, len(rows), total)
        return rows, total
