from __future__ import annotations

import secrets

from ..core.constants import SESSION_CODE_ALPHABET, SESSION_CODE_SEGMENT_LENGTH, SESSION_CODE_SEPARATOR


def random_segment(length: int = SESSION_CODE_SEGMENT_LENGTH) -> str:
    return "".join(secrets.choice(SESSION_CODE_ALPHABET) for _ in range(length))


def generate_session_code() -> str:
    """Two independent segments, e.g. ``K7QH2M-XW9PRT``."""
    return f"{random_segment()}{SESSION_CODE_SEPARATOR}{random_segment()}"


def normalize_session_code(value: str) -> str:
    return value.strip().upper()
