from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local, truncate_to_millis
from ..common.validators import optional_text, require_non_empty
from ..core.exceptions import InvalidRequest, SessionExpired, SessionNotFound
from ..sessions.codes import normalize_session_code
from ..sessions.qr import parse_payload
from ..sessions.repository import SessionRepository
from .model import CheckIn, CheckInResult
from .repository import CheckInRepository

logger = logging.getLogger(__name__)


def resolve_session_code(session_code: Optional[str], payload: dict, qr_raw: Optional[str]) -> Optional[str]:
    """Explicit code first, then the scanned payload, then the raw scan text."""
    for candidate in (session_code, payload.get("sessionCode"), payload.get("qrCode")):
        text = optional_text(candidate)
        if text:
            return text
    if qr_raw and not payload:
        return optional_text(qr_raw)
    return None


class CheckInReconciler:
    """Records a student's attendance against a session at most once.

    Repeats for the same (session, student) are answered with the stored entry
    and ``already_recorded=True``; clients can retry freely.
    """

    def __init__(
        self,
        checkins: CheckInRepository,
        sessions: SessionRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._checkins = checkins
        self._sessions = sessions
        self._clock = clock

    def check_in(
        self,
        student_id: Any,
        session_code: Any = None,
        *,
        centre: Any = None,
        location: Any = None,
        client_timestamp: Any = None,
        qr_raw: Any = None,
        now: datetime | None = None,
    ) -> CheckInResult:
        student_id = require_non_empty(student_id, "studentId")
        qr_raw = optional_text(qr_raw)
        payload = parse_payload(qr_raw)

        code = resolve_session_code(optional_text(session_code), payload, qr_raw)
        if not code:
            raise InvalidRequest("sessionCode or qrCode is required")
        code = normalize_session_code(code)

        session = self._sessions.get_by_code(code)
        if not session:
            raise SessionNotFound(f"Session {code} not found")

        now = truncate_to_millis(now or self._clock())
        if now >= session.expires_at:
            raise SessionExpired(f"Session {code} expired at {session.expires_at.isoformat()}")

        entry = CheckIn(
            student_id=student_id,
            session_code=session.session_code,
            timestamp=now,
            course_code=session.course_code or optional_text(payload.get("courseCode")),
            course_name=session.course_name
            or optional_text(payload.get("courseName"))
            or optional_text(payload.get("course")),
            lecturer=session.lecturer
            or optional_text(payload.get("lecturer"))
            or optional_text(payload.get("lecturerName")),
            centre=optional_text(centre),
            location=optional_text(location),
            client_timestamp=optional_text(client_timestamp),
            qr_raw=qr_raw,
        )

        stored, created = self._checkins.insert_if_absent(entry)
        if created:
            logger.info("Check-in recorded: student=%s session=%s", student_id, session.session_code)
        else:
            logger.info("Duplicate check-in ignored: student=%s session=%s", student_id, session.session_code)

        return CheckInResult(entry=stored, already_recorded=not created)
