from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Session
from .repository import SessionRepository

_COLUMNS = "session_code, course_code, course_name, lecturer, issued_at, expires_at"


def _to_session(r: dict) -> Session:
    return Session(
        session_code=r["session_code"],
        course_code=r["course_code"],
        course_name=r.get("course_name") or "",
        lecturer=r["lecturer"],
        issued_at=r["issued_at"],
        expires_at=r["expires_at"],
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, session: Session) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    f"""
                    INSERT INTO attendance_sessions({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        session.session_code,
                        session.course_code,
                        session.course_name,
                        session.lecturer,
                        session.issued_at,
                        session.expires_at,
                    ),
                )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    return False
                raise
            return True

    def get_by_code(self, session_code: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_code=%s",
                (session_code,),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_for_lecturer(self, lecturer: str, *, active_at: Optional[datetime] = None) -> Sequence[Session]:
        clauses = ["lecturer=%s"]
        params: list[object] = [lecturer]
        if active_at is not None:
            clauses.append("issued_at <= %s AND expires_at > %s")
            params.extend([active_at, active_at])

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE {where}
                ORDER BY issued_at DESC, session_id DESC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]
