from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Sequence

from ..common.datetime_utils import now_local, truncate_to_millis
from ..common.validators import optional_text, require_int_in_range, require_non_empty
from ..core.constants import DEFAULT_CODE_MAX_ATTEMPTS, DEFAULT_MAX_SESSION_SECONDS
from ..core.exceptions import CodeGenerationExhausted, InvalidRequest, SessionNotFound
from . import qr
from .codes import generate_session_code, normalize_session_code
from .model import Session, SessionTicket
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Mints session codes and persists session metadata.

    Collisions are detected by the store's unique constraint, so two lecturers
    drawing the same code at the same moment cannot both succeed.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        code_factory: Callable[[], str] = generate_session_code,
        max_attempts: int = DEFAULT_CODE_MAX_ATTEMPTS,
        max_duration_seconds: int = DEFAULT_MAX_SESSION_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._sessions = sessions
        self._code_factory = code_factory
        self._max_attempts = int(max_attempts)
        self._max_duration_seconds = int(max_duration_seconds)
        self._clock = clock

    def create_session(
        self,
        course_code: Any,
        course_name: Any,
        lecturer: Any,
        duration_seconds: Any,
        *,
        now: datetime | None = None,
    ) -> SessionTicket:
        course_code = require_non_empty(course_code, "courseCode")
        lecturer = require_non_empty(lecturer, "lecturer")
        course_name = optional_text(course_name) or ""
        duration = require_int_in_range(
            duration_seconds, "durationSeconds", low=1, high=self._max_duration_seconds
        )

        issued_at = truncate_to_millis(now or self._clock())
        expires_at = issued_at + timedelta(seconds=duration)

        for attempt in range(1, self._max_attempts + 1):
            session = Session(
                session_code=self._code_factory(),
                course_code=course_code,
                course_name=course_name,
                lecturer=lecturer,
                issued_at=issued_at,
                expires_at=expires_at,
            )
            if self._sessions.insert(session):
                logger.info(
                    "Session %s created for %s by %s (expires %s)",
                    session.session_code, course_code, lecturer, expires_at.isoformat(),
                )
                return self._ticket(session)
            logger.warning("Session code collision on attempt %d/%d", attempt, self._max_attempts)

        logger.error("Session code generation exhausted after %d attempts", self._max_attempts)
        raise CodeGenerationExhausted(f"Could not generate a unique session code after {self._max_attempts} attempts")

    def get_session(self, session_code: Any) -> Session:
        code = normalize_session_code(require_non_empty(session_code, "sessionCode"))
        session = self._sessions.get_by_code(code)
        if not session:
            raise SessionNotFound(f"Session {code} not found")
        return session

    def list_sessions(self, lecturer: Any, *, active_only: bool = False, now: datetime | None = None) -> Sequence[Session]:
        lecturer = require_non_empty(lecturer, "lecturer")
        active_at = (now or self._clock()) if active_only else None
        return self._sessions.list_for_lecturer(lecturer, active_at=active_at)

    def qr_png(self, session_code: Any) -> bytes:
        return qr.render_png(qr.build_payload(self.get_session(session_code)))

    def now(self) -> datetime:
        return self._clock()

    def _ticket(self, session: Session) -> SessionTicket:
        payload = qr.build_payload(session)
        return SessionTicket(session=session, qr_payload=payload, qr_data_url=qr.to_data_url(qr.render_png(payload)))


def duration_from_body(body: dict) -> Any:
    """``durationSeconds`` wins; ``durationMinutes`` is what older clients send."""
    if body.get("durationSeconds") is not None:
        return body["durationSeconds"]
    minutes = body.get("durationMinutes")
    if minutes is None:
        raise InvalidRequest("durationSeconds is required")
    if isinstance(minutes, bool):
        raise InvalidRequest("durationMinutes must be a number")
    try:
        return int(round(float(minutes) * 60))
    except (TypeError, ValueError, OverflowError):
        raise InvalidRequest("durationMinutes must be a number") from None
