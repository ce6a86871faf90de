from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..checkins.model import CheckIn
from ..common.validators import optional_text


@dataclass(frozen=True)
class LogFilters:
    """Dashboard filters as the client sends them; nothing here is validated
    yet, unusable values are dropped when the query is built."""

    course_code: Optional[str] = None
    session_code: Optional[str] = None
    date: Optional[str] = None
    bucket: Optional[str] = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "LogFilters":
        return cls(
            course_code=optional_text(args.get("courseCode")),
            session_code=optional_text(args.get("sessionCode")),
            date=optional_text(args.get("date")),
            # "filterType" is what the original dashboard sends
            bucket=optional_text(args.get("bucket") or args.get("filterType")),
        )


@dataclass(frozen=True)
class LogPage:
    entries: Sequence[CheckIn]
    total_count: int
    total_pages: int
    page: int
    page_size: int

    def to_dict(self) -> dict:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
            "page": self.page,
            "pageSize": self.page_size,
        }
