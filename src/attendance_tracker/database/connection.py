from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import mysql.connector

from ..core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    timeout_seconds: int = 5


class DatabaseConnection:
    """Singleton-like DB connection factory.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    Every connection is bounded by ``timeout_seconds`` both when connecting and
    per statement, so a stalled server surfaces as ``StoreUnavailable``.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        try:
            conn = mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                connection_timeout=int(self._config.timeout_seconds),
            )
        except mysql.connector.Error as e:
            logger.exception("MySQL connection to %s:%s failed", self._config.host, self._config.port)
            raise StoreUnavailable("Attendance store is unavailable") from e

        self._limit_statement_time(conn)
        return conn

    def _limit_statement_time(self, conn) -> None:
        cur = conn.cursor()
        try:
            cur.execute("SET SESSION max_execution_time = %s", (int(self._config.timeout_seconds) * 1000,))
        except mysql.connector.ProgrammingError:
            # MariaDB and older MySQL servers do not know this variable.
            logger.debug("max_execution_time not supported by server; relying on connection timeout")
        finally:
            cur.close()
