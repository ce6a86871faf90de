from __future__ import annotations

from datetime import datetime, timedelta

import mysql.connector
import pytest
from mysql.connector import errorcode

from attendance_tracker.checkins.model import CheckIn, CheckInQuery
from attendance_tracker.checkins.mysql_checkin_repository import MySQLCheckInRepository
from attendance_tracker.checkins.service import CheckInReconciler
from attendance_tracker.core.exceptions import StoreUnavailable
from attendance_tracker.database.connection import DBConfig, DatabaseConnection
from attendance_tracker.database.mysql_base import like_contains
from attendance_tracker.sessions.model import Session
from attendance_tracker.sessions.memory_session_repository import InMemorySessionRepository
from attendance_tracker.sessions.mysql_session_repository import MySQLSessionRepository

NOW = datetime(2024, 1, 17, 9, 30)


class FakeCursor:
    def __init__(self, script):
        self._script = list(script)
        self.executed = []
        self.lastrowid = 41
        self._result = None

    def execute(self, sql, params=None):
        self.executed.append((" ".join(sql.split()), params))
        step = self._script.pop(0) if self._script else None
        if isinstance(step, Exception):
            raise step
        self._result = step

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result or [])

    def close(self):
        pass


class FakeConn:
    def __init__(self, cursor):
        self.cur = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeFactory:
    def __init__(self, *script):
        self.conn = FakeConn(FakeCursor(script))

    def connect(self):
        return self.conn


def _dup() -> mysql.connector.IntegrityError:
    return mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)


def _row(**overrides):
    row = {
        "checkin_id": 7,
        "student_id": "S1",
        "session_code": "KQ7HXM-PRT2WZ",
        "course_code": "BIT364",
        "course_name": "Entrepreneurship",
        "lecturer": "Prof. Anyimadu",
        "centre": None,
        "location": None,
        "checked_in_at": NOW,
        "client_timestamp": None,
        "qr_raw": None,
    }
    row.update(overrides)
    return row


def _entry() -> CheckIn:
    return CheckIn(student_id="S1", session_code="KQ7HXM-PRT2WZ", timestamp=NOW, course_code="BIT364")


def test_insert_returns_created_entry_with_store_id():
    factory = FakeFactory(None)

    stored, created = MySQLCheckInRepository(factory).insert_if_absent(_entry())

    assert created is True
    assert stored.checkin_id == 41
    assert factory.conn.committed


def test_duplicate_key_reads_back_existing_row():
    factory = FakeFactory(_dup(), [_row(centre="Main Campus")])

    stored, created = MySQLCheckInRepository(factory).insert_if_absent(_entry())

    assert created is False
    assert stored.checkin_id == 7
    assert stored.centre == "Main Campus"
    insert_sql, select_sql = (sql for sql, _ in factory.conn.cur.executed)
    assert insert_sql.startswith("INSERT INTO attendance_checkins")
    assert select_sql.startswith("SELECT")


def test_other_integrity_errors_propagate():
    error = mysql.connector.IntegrityError(msg="Column cannot be null", errno=errorcode.ER_BAD_NULL_ERROR)
    factory = FakeFactory(error)

    with pytest.raises(mysql.connector.IntegrityError):
        MySQLCheckInRepository(factory).insert_if_absent(_entry())
    assert factory.conn.rolled_back


def test_session_insert_signals_collision():
    session = Session("KQ7HXM-PRT2WZ", "BIT364", "E", "Prof. A", NOW, NOW)

    assert MySQLSessionRepository(FakeFactory(None)).insert(session) is True
    assert MySQLSessionRepository(FakeFactory(_dup())).insert(session) is False


def test_search_counts_and_pages_with_same_predicate():
    factory = FakeFactory([{"total": 3}], [_row(), _row(checkin_id=6, student_id="S2")])
    query = CheckInQuery(course_code="bit", start=NOW, end=NOW)

    rows, total = MySQLCheckInRepository(factory).search(query, offset=20, limit=10)

    (count_sql, count_params), (page_sql, page_params) = factory.conn.cur.executed
    assert total == 3
    assert [r.checkin_id for r in rows] == [7, 6]
    assert count_sql.split("WHERE", 1)[1] == page_sql.split("WHERE", 1)[1].split(" ORDER BY")[0]
    assert page_params == count_params + (10, 20)
    assert "ORDER BY checked_in_at DESC, checkin_id DESC" in page_sql


def test_operational_errors_become_store_unavailable():
    factory = FakeFactory(mysql.connector.OperationalError(msg="Lost connection", errno=2013))

    with pytest.raises(StoreUnavailable):
        MySQLCheckInRepository(factory).search(CheckInQuery(session_code="KQ7H"), offset=0, limit=10)


def test_query_timeout_becomes_store_unavailable():
    factory = FakeFactory(mysql.connector.DatabaseError(msg="Query execution was interrupted", errno=3024))

    with pytest.raises(StoreUnavailable):
        MySQLCheckInRepository(factory).search(CheckInQuery(), offset=0, limit=10)


def test_connect_failure_becomes_store_unavailable(monkeypatch):
    def refuse(**kwargs):
        assert kwargs["connection_timeout"] == 2
        raise mysql.connector.InterfaceError(msg="Can't connect", errno=2003)

    monkeypatch.setattr(mysql.connector, "connect", refuse)
    conn = DatabaseConnection(DBConfig("db", 3306, "u", "p", "attendance", timeout_seconds=2))

    with pytest.raises(StoreUnavailable):
        conn.connect()


def test_like_pattern_matches_wildcards_literally():
    assert like_contains("50%_off") == "%50\\%\\_off%"


def test_reconciler_writes_timestamps_the_store_can_hold_exactly():
    sessions = InMemorySessionRepository()
    sessions.insert(Session("KQ7HXM-PRT2WZ", "BIT364", "E", "Prof. A", NOW, NOW + timedelta(hours=1)))
    factory = FakeFactory(None)

    result = CheckInReconciler(MySQLCheckInRepository(factory), sessions).check_in(
        "S1", "KQ7HXM-PRT2WZ", now=NOW.replace(microsecond=123600)
    )

    _, params = factory.conn.cur.executed[0]
    assert params[7] == NOW.replace(microsecond=123000)
    assert result.entry.timestamp == params[7]
