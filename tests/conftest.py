from __future__ import annotations

from datetime import datetime

import jwt
import pytest

from attendance_tracker.checkins.memory_checkin_repository import InMemoryCheckInRepository
from attendance_tracker.main import create_app
from attendance_tracker.sessions.memory_session_repository import InMemorySessionRepository

TEST_SETTINGS = "attendance_tracker.config.testing"
TEST_JWT_SECRET = "test-jwt-secret"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 17, 9, 30, 0)


@pytest.fixture
def sessions_repo() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def checkins_repo() -> InMemoryCheckInRepository:
    return InMemoryCheckInRepository()


@pytest.fixture
def app():
    app = create_app(TEST_SETTINGS)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def container(app):
    return app.extensions["attendance_container"]


def make_token(user_id: str, role: str, name: str | None = None, *, secret: str = TEST_JWT_SECRET) -> str:
    return jwt.encode({"user": {"id": user_id, "role": role, "name": name}}, secret, algorithm="HS256")


def bearer(user_id: str, role: str, name: str | None = None) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, role, name)}"}


@pytest.fixture
def lecturer_headers() -> dict:
    return bearer("L1", "lecturer", "Prof. Anyimadu")


@pytest.fixture
def student_headers() -> dict:
    return bearer("S1", "student", "Ama Mensah")
