from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class CheckIn:
    """One recorded attendance event; self-describing once written.

    ``checkin_id`` is None until the store assigns one.
    """

    student_id: str
    session_code: str
    timestamp: datetime
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    lecturer: Optional[str] = None
    centre: Optional[str] = None
    location: Optional[str] = None
    client_timestamp: Optional[str] = None
    qr_raw: Optional[str] = None
    checkin_id: Optional[int] = None

    def with_id(self, checkin_id: int) -> "CheckIn":
        return replace(self, checkin_id=checkin_id)

    def to_dict(self) -> dict:
        return {
            "id": self.checkin_id,
            "studentId": self.student_id,
            "sessionCode": self.session_code,
            "courseCode": self.course_code,
            "courseName": self.course_name,
            "lecturer": self.lecturer,
            "centre": self.centre,
            "location": self.location,
            "timestamp": isoformat_or_none(self.timestamp),
            "clientTimestamp": self.client_timestamp,
            "qrRaw": self.qr_raw,
        }


@dataclass(frozen=True)
class CheckInResult:
    entry: CheckIn
    already_recorded: bool
    recorded: bool = True

    def to_dict(self) -> dict:
        return {
            "recorded": self.recorded,
            "alreadyRecorded": self.already_recorded,
            "entry": self.entry.to_dict(),
        }


@dataclass(frozen=True)
class CheckInQuery:
    """Store-level predicate; every set field is ANDed.

    ``course_code``/``session_code`` are case-insensitive substrings,
    ``start``/``end`` a half-open timestamp range.
    """

    course_code: Optional[str] = None
    session_code: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
