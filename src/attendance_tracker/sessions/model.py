from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class Session:
    """A time-bounded, uniquely coded invitation to check in."""

    session_code: str
    course_code: str
    course_name: str
    lecturer: str
    issued_at: datetime
    expires_at: datetime

    def is_active(self, now: datetime) -> bool:
        # Half-open window [issued_at, expires_at)
        return self.issued_at <= now < self.expires_at

    def to_dict(self) -> dict:
        return {
            "sessionCode": self.session_code,
            "courseCode": self.course_code,
            "courseName": self.course_name,
            "lecturer": self.lecturer,
            "issuedAt": isoformat_or_none(self.issued_at),
            "expiresAt": isoformat_or_none(self.expires_at),
        }


@dataclass(frozen=True)
class SessionTicket:
    """Freshly created session plus what the lecturer client renders."""

    session: Session
    qr_payload: str
    qr_data_url: str

    def to_dict(self) -> dict:
        data = self.session.to_dict()
        data["qrPayload"] = self.qr_payload
        data["qrDataUrl"] = self.qr_data_url
        return data
