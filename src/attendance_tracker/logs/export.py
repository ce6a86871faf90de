"""CSV rendering for attendance exports."""
from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable

from ..checkins.model import CheckIn
from ..core.constants import CSV_TIMESTAMP_FORMAT, EXPORT_COLUMNS
from .model import LogFilters


def _row(entry: CheckIn) -> list[str]:
    return [
        entry.timestamp.strftime(CSV_TIMESTAMP_FORMAT) if entry.timestamp else "",
        entry.student_id or "",
        entry.centre or "",
        entry.course_code or "",
        entry.course_name or "",
        entry.lecturer or "",
        entry.session_code or "",
    ]


def render_csv(entries: Iterable[CheckIn]) -> str:
    """Header plus one line per entry, every field quoted, ``\\n`` between
    lines and no trailing newline."""
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for entry in entries:
        writer.writerow(_row(entry))
    # Drop only the final terminator; a field may itself end in a newline.
    return out.getvalue()[:-1]


def export_filename(filters: LogFilters, today: date) -> str:
    parts = [f"attendance_logs_{today.strftime('%Y-%m-%d')}"]
    for value in (filters.course_code, filters.session_code):
        if value:
            parts.append("".join(ch for ch in value if ch.isalnum() or ch in "-_"))
    return "_".join(p for p in parts if p) + ".csv"
