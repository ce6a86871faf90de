from __future__ import annotations

import threading
from typing import Optional, Sequence

from .model import CheckIn, CheckInQuery
from .repository import CheckInRepository


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def _matches(entry: CheckIn, query: CheckInQuery) -> bool:
    if query.course_code and not _contains(entry.course_code, query.course_code):
        return False
    if query.session_code and not _contains(entry.session_code, query.session_code):
        return False
    if query.start is not None and entry.timestamp < query.start:
        return False
    if query.end is not None and entry.timestamp >= query.end:
        return False
    return True


class InMemoryCheckInRepository(CheckInRepository):
    """Process-local check-in store; the lock makes insert-if-absent atomic."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_key: dict[tuple[str, str], CheckIn] = {}
        self._next_id = 0

    def insert_if_absent(self, entry: CheckIn) -> tuple[CheckIn, bool]:
        key = (entry.session_code, entry.student_id)
        with self._lock:
            existing = self._by_key.get(key)
            if existing:
                return existing, False
            self._next_id += 1
            stored = entry.with_id(self._next_id)
            self._by_key[key] = stored
            return stored, True

    def search(self, query: CheckInQuery, *, offset: int, limit: int) -> tuple[Sequence[CheckIn], int]:
        with self._lock:
            items = [e for e in self._by_key.values() if _matches(e, query)]
        items.sort(key=lambda e: (e.timestamp, e.checkin_id), reverse=True)
        return items[offset:offset + limit], len(items)
