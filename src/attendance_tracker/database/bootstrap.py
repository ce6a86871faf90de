from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..core.exceptions import StoreUnavailable
from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # schema.sql holds DDL only: no ';' inside literals, '--' comments on their own lines.
    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    for stmt in "\n".join(lines).split(";"):
        stmt = stmt.strip()
        if stmt:
            yield stmt


def ensure_database_exists(config: DBConfig) -> None:
    conn = mysql.connector.connect(
        host=config.host,
        port=config.port,
        user=config.user,
        password=config.password,
        connection_timeout=config.timeout_seconds,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(config: DBConfig, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    try:
        ensure_database_exists(config)
        conn = mysql.connector.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
            connection_timeout=config.timeout_seconds,
        )
    except mysql.connector.Error as e:
        logger.exception("Could not reach MySQL to apply schema")
        raise StoreUnavailable("Attendance store is unavailable") from e

    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(Path(schema_path).read_text(encoding="utf-8")):
            cur.execute(stmt)
        conn.commit()
        cur.close()
    finally:
        conn.close()

    logger.info("Schema applied to %s@%s/%s", config.user, config.host, config.database)
