from __future__ import annotations

import json
import threading
from datetime import timedelta

import pytest

from attendance_tracker.checkins.model import CheckInQuery
from attendance_tracker.checkins.service import CheckInReconciler
from attendance_tracker.core.exceptions import InvalidRequest, SessionExpired, SessionNotFound
from attendance_tracker.sessions.service import SessionRegistry

CODE = "KQ7HXM-PRT2WZ"


@pytest.fixture
def session(sessions_repo, fixed_now):
    registry = SessionRegistry(sessions_repo, code_factory=lambda: CODE)
    return registry.create_session("BIT364", "Entrepreneurship", "Prof. Anyimadu", 60, now=fixed_now).session


@pytest.fixture
def reconciler(checkins_repo, sessions_repo):
    return CheckInReconciler(checkins_repo, sessions_repo)


def _all(checkins_repo):
    entries, _ = checkins_repo.search(CheckInQuery(), offset=0, limit=1000)
    return entries


def test_first_checkin_records_denormalized_entry(reconciler, session, fixed_now):
    result = reconciler.check_in("S1", CODE, centre="Main Campus", location="Hall B", now=fixed_now)

    assert result.recorded is True
    assert result.already_recorded is False
    entry = result.entry
    assert entry.checkin_id is not None
    assert (entry.course_code, entry.course_name, entry.lecturer) == ("BIT364", "Entrepreneurship", "Prof. Anyimadu")
    assert (entry.centre, entry.location) == ("Main Campus", "Hall B")
    assert entry.timestamp == fixed_now


def test_repeated_checkins_keep_one_entry(reconciler, checkins_repo, session, fixed_now):
    first = reconciler.check_in("S1", CODE, now=fixed_now)
    second = reconciler.check_in("S1", CODE, centre="Elsewhere", now=fixed_now + timedelta(seconds=5))
    third = reconciler.check_in("S1", CODE, now=fixed_now + timedelta(seconds=9))

    assert second.already_recorded is True
    assert third.already_recorded is True
    assert second.entry == first.entry
    assert third.entry == first.entry
    assert len(_all(checkins_repo)) == 1


def test_concurrent_checkins_for_same_pair(reconciler, checkins_repo, session, fixed_now):
    results = []
    barrier = threading.Barrier(16)

    def worker():
        barrier.wait()
        results.append(reconciler.check_in("S1", CODE, now=fixed_now))

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(_all(checkins_repo)) == 1
    assert sum(1 for r in results if not r.already_recorded) == 1
    assert len({r.entry for r in results}) == 1


def test_expiry_boundary_is_half_open(reconciler, session):
    just_before = session.expires_at - timedelta(milliseconds=1)
    assert reconciler.check_in("S1", CODE, now=just_before).recorded

    with pytest.raises(SessionExpired):
        reconciler.check_in("S2", CODE, now=session.expires_at)
    with pytest.raises(SessionExpired):
        reconciler.check_in("S3", CODE, now=session.expires_at + timedelta(milliseconds=1))


def test_unknown_session(reconciler, fixed_now):
    with pytest.raises(SessionNotFound):
        reconciler.check_in("S1", "ZZZZZZ-ZZZZZZ", now=fixed_now)


@pytest.mark.parametrize("student_id, code", [("", CODE), (None, CODE), ("S1", None), ("S1", "   ")])
def test_missing_required_fields(reconciler, session, student_id, code, fixed_now):
    with pytest.raises(InvalidRequest):
        reconciler.check_in(student_id, code, now=fixed_now)


def test_session_code_taken_from_scanned_payload(reconciler, session, fixed_now):
    raw = json.dumps({"sessionCode": CODE.lower(), "courseCode": "BIT364", "course": "Entrepreneurship"})

    result = reconciler.check_in("S1", qr_raw=raw, now=fixed_now)

    assert result.entry.session_code == CODE
    assert result.entry.qr_raw == raw


def test_plain_text_scan_is_the_code(reconciler, session, fixed_now):
    assert reconciler.check_in("S1", qr_raw=CODE, now=fixed_now).entry.session_code == CODE


def test_payload_fills_fields_missing_on_session(checkins_repo, sessions_repo, fixed_now):
    registry = SessionRegistry(sessions_repo, code_factory=lambda: CODE)
    registry.create_session("BIT364", "", "Prof. Anyimadu", 60, now=fixed_now)
    reconciler = CheckInReconciler(checkins_repo, sessions_repo)
    raw = json.dumps({"sessionCode": CODE, "courseName": "From QR", "lecturer": "Someone Else"})

    entry = reconciler.check_in("S1", qr_raw=raw, now=fixed_now).entry

    assert entry.course_name == "From QR"
    # session value wins when both are present
    assert entry.lecturer == "Prof. Anyimadu"


def test_client_timestamp_is_informational(reconciler, session, fixed_now):
    entry = reconciler.check_in("S1", CODE, client_timestamp="1999-01-01T00:00:00Z", now=fixed_now).entry

    assert entry.timestamp == fixed_now
    assert entry.client_timestamp == "1999-01-01T00:00:00Z"


def test_timestamp_keeps_millisecond_precision_across_repeats(reconciler, session, fixed_now):
    stamped = fixed_now.replace(microsecond=123600)

    first = reconciler.check_in("S1", CODE, now=stamped)
    repeat = reconciler.check_in("S1", CODE, now=stamped + timedelta(seconds=2))

    assert first.entry.timestamp == fixed_now.replace(microsecond=123000)
    assert repeat.entry.to_dict() == first.entry.to_dict()
