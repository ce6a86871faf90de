from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from ..checkins.model import CheckIn, CheckInQuery
from ..checkins.repository import CheckInRepository
from ..common.datetime_utils import bucket_range, try_parse_iso_date
from ..common.validators import clamp, lenient_int
from ..core.constants import DEFAULT_EXPORT_MAX_ROWS, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.enums import Bucket
from .model import LogFilters, LogPage

logger = logging.getLogger(__name__)


def build_query(filters: LogFilters) -> CheckInQuery:
    """Translate dashboard filters into a store predicate.

    A malformed or out-of-range date, or an unknown bucket, drops the time
    filter instead of failing the whole query.
    """
    start = end = None
    anchor = try_parse_iso_date(filters.date)
    if filters.date and anchor is None:
        logger.info("Ignoring malformed date filter %r", filters.date)
    if anchor is not None:
        try:
            bucket = Bucket((filters.bucket or Bucket.DAY.value).lower())
        except ValueError:
            logger.info("Ignoring unknown bucket %r", filters.bucket)
        else:
            try:
                start, end = bucket_range(anchor, bucket)
            except (OverflowError, ValueError):
                # the range end falls past 9999-12-31
                logger.info("Ignoring out-of-range date filter %r (%s)", filters.date, bucket.value)

    return CheckInQuery(
        course_code=filters.course_code,
        session_code=filters.session_code,
        start=start,
        end=end,
    )


class LogQueryService:
    def __init__(
        self,
        checkins: CheckInRepository,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        export_max_rows: int = DEFAULT_EXPORT_MAX_ROWS,
    ):
        self._checkins = checkins
        self._default_page_size = int(default_page_size)
        self._max_page_size = int(max_page_size)
        self._export_max_rows = int(export_max_rows)

    def query_logs(self, filters: LogFilters, page: Any = 1, page_size: Any = None) -> LogPage:
        page_num = max(1, lenient_int(page, 1))
        size = clamp(lenient_int(page_size, self._default_page_size), 1, self._max_page_size)

        entries, total = self._checkins.search(
            build_query(filters),
            offset=(page_num - 1) * size,
            limit=size,
        )
        return LogPage(
            entries=entries,
            total_count=total,
            total_pages=max(1, math.ceil(total / size)),
            page=page_num,
            page_size=size,
        )

    def export_rows(self, filters: LogFilters) -> Sequence[CheckIn]:
        entries, total = self._checkins.search(build_query(filters), offset=0, limit=self._export_max_rows)
        if total > len(entries):
            logger.warning("Export truncated to %d of %d rows", len(entries), total)
        return entries
