from __future__ import annotations

from typing import Protocol, Sequence

from .model import CheckIn, CheckInQuery


class CheckInRepository(Protocol):
    def insert_if_absent(self, entry: CheckIn) -> tuple[CheckIn, bool]:
        """Atomically insert ``entry`` unless (session_code, student_id) exists.

        Returns the stored entry and whether this call created it. Must not be
        implemented as a lookup followed by an insert.
        """

        raise NotImplementedError

    def search(self, query: CheckInQuery, *, offset: int, limit: int) -> tuple[Sequence[CheckIn], int]:
        """One page ordered by (timestamp, id) descending, plus the exact total
        matching the same predicate."""

        raise NotImplementedError
