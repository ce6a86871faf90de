from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    """Storage interface for sessions.

    ``insert`` relies on the store's unique constraint on ``session_code``: it
    returns False when the code is already taken instead of checking first.
    """

    def insert(self, session: Session) -> bool:
        raise NotImplementedError

    def get_by_code(self, session_code: str) -> Optional[Session]:
        raise NotImplementedError

    def list_for_lecturer(self, lecturer: str, *, active_at: Optional[datetime] = None) -> Sequence[Session]:
        raise NotImplementedError
