from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.enums import Bucket


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def try_parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision to match the store's DATETIME(3) columns."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def bucket_range(anchor: date, bucket: Bucket) -> tuple[datetime, datetime]:
    """Expand an anchor date into a half-open ``[start, end)`` range.

    Weeks start on Monday whatever the locale.
    """
    if bucket == Bucket.DAY:
        start = anchor
        end = anchor + timedelta(days=1)
    elif bucket == Bucket.WEEK:
        start = anchor - timedelta(days=anchor.weekday())
        end = start + timedelta(days=7)
    elif bucket == Bucket.MONTH:
        start = anchor.replace(day=1)
        if start.month == 12:
            end = start.replace(year=start.year + 1, month=1)
        else:
            end = start.replace(month=start.month + 1)
    else:
        raise ValueError(f"Unsupported bucket: {bucket!r}")

    return datetime.combine(start, datetime.min.time()), datetime.combine(end, datetime.min.time())


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="milliseconds") if value else None
