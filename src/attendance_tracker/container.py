from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from types import ModuleType
from typing import Callable, Optional

from .checkins.memory_checkin_repository import InMemoryCheckInRepository
from .checkins.mysql_checkin_repository import MySQLCheckInRepository
from .checkins.repository import CheckInRepository
from .checkins.service import CheckInReconciler
from .common.datetime_utils import now_local
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .logs.service import LogQueryService
from .sessions.memory_session_repository import InMemorySessionRepository
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionRegistry

logger = logging.getLogger(__name__)

STORE_BACKENDS = {"mysql", "memory"}


@dataclass(frozen=True)
class Container:
    store_backend: str
    conn: Optional[DatabaseConnection]
    clock: Callable[[], datetime]

    sessions_repo: SessionRepository
    checkins_repo: CheckInRepository

    session_registry: SessionRegistry
    checkin_reconciler: CheckInReconciler
    log_query_service: LogQueryService


def db_config_from(settings: ModuleType) -> DBConfig:
    db_config = getattr(settings, "DB_CONFIG")
    return DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        timeout_seconds=int(getattr(settings, "STORE_TIMEOUT_SECONDS", 5)),
    )


def build_container(settings: ModuleType, *, clock: Callable[[], datetime] = now_local) -> Container:
    """Wire repositories and services. The store backend is picked once here;
    there is no runtime fallback from one backend to the other."""

    backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(f"Unknown STORE_BACKEND {backend!r}; expected one of {sorted(STORE_BACKENDS)}")

    conn: Optional[DatabaseConnection] = None
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(db_config_from(settings))
        sessions_repo: SessionRepository = MySQLSessionRepository(conn)
        checkins_repo: CheckInRepository = MySQLCheckInRepository(conn)
    else:
        sessions_repo = InMemorySessionRepository()
        checkins_repo = InMemoryCheckInRepository()
    logger.info("Using %s attendance store", backend)

    session_registry = SessionRegistry(
        sessions_repo,
        max_attempts=getattr(settings, "SESSION_CODE_MAX_ATTEMPTS", constants.DEFAULT_CODE_MAX_ATTEMPTS),
        max_duration_seconds=getattr(settings, "SESSION_MAX_DURATION_SECONDS", constants.DEFAULT_MAX_SESSION_SECONDS),
        clock=clock,
    )
    checkin_reconciler = CheckInReconciler(checkins_repo, sessions_repo, clock=clock)
    log_query_service = LogQueryService(
        checkins_repo,
        default_page_size=getattr(settings, "LOGS_DEFAULT_PAGE_SIZE", constants.DEFAULT_PAGE_SIZE),
        max_page_size=getattr(settings, "LOGS_MAX_PAGE_SIZE", constants.MAX_PAGE_SIZE),
        export_max_rows=getattr(settings, "EXPORT_MAX_ROWS", constants.DEFAULT_EXPORT_MAX_ROWS),
    )

    return Container(
        store_backend=backend,
        conn=conn,
        clock=clock,
        sessions_repo=sessions_repo,
        checkins_repo=checkins_repo,
        session_registry=session_registry,
        checkin_reconciler=checkin_reconciler,
        log_query_service=log_query_service,
    )
