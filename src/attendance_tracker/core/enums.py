from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried by the authenticated principal."""

    STUDENT = "student"
    LECTURER = "lecturer"
    ADMIN = "admin"


class Bucket(str, Enum):
    """Time-range expansion applied to a single anchor date."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
