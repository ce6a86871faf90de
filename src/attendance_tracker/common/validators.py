from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import InvalidRequest


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidRequest(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_int_in_range(value: Any, field_name: str, *, low: int, high: int) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise InvalidRequest(f"{field_name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidRequest(f"{field_name} must be an integer") from None
    if isinstance(value, float) and value != number:
        raise InvalidRequest(f"{field_name} must be an integer")
    if not low <= number <= high:
        raise InvalidRequest(f"{field_name} must be between {low} and {high}")
    return number


def lenient_int(value: Any, default: int) -> int:
    """Parse query-string style integers, falling back to ``default``."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
