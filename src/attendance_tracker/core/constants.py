"""Constants and defaults.

Settings modules override most of these; the values here are what services
fall back to when constructed directly (tests, scripts).
"""

# Unambiguous when hand-typed: no 0/O, 1/I/L.
SESSION_CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
SESSION_CODE_SEGMENT_LENGTH = 6
SESSION_CODE_SEPARATOR = "-"

DEFAULT_CODE_MAX_ATTEMPTS = 5
DEFAULT_MAX_SESSION_SECONDS = 24 * 60 * 60

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100
DEFAULT_EXPORT_MAX_ROWS = 100_000

CSV_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
EXPORT_COLUMNS = (
    "timestamp",
    "studentId",
    "centre",
    "courseCode",
    "courseName",
    "lecturer",
    "sessionCode",
)
