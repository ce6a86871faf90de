from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional, Sequence

from .model import Session
from .repository import SessionRepository


class InMemorySessionRepository(SessionRepository):
    """Process-local session store for tests and demos."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_code: dict[str, Session] = {}
        self._order: dict[str, int] = {}

    def insert(self, session: Session) -> bool:
        with self._lock:
            if session.session_code in self._by_code:
                return False
            self._by_code[session.session_code] = session
            self._order[session.session_code] = len(self._order)
            return True

    def get_by_code(self, session_code: str) -> Optional[Session]:
        with self._lock:
            return self._by_code.get(session_code)

    def list_for_lecturer(self, lecturer: str, *, active_at: Optional[datetime] = None) -> Sequence[Session]:
        with self._lock:
            items = [s for s in self._by_code.values() if s.lecturer == lecturer]
            if active_at is not None:
                items = [s for s in items if s.is_active(active_at)]
            items.sort(key=lambda s: (s.issued_at, self._order[s.session_code]), reverse=True)
            return items
