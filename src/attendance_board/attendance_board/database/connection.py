from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional

import mysql.connector
from mysql.connector import pooling
from mysql.connector.errors import PoolError

from ..common.logger import get_logger

log = get_logger("database")


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5


def db_config_from_dict(db_config: dict) -> DBConfig:
    return DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "attendance_board")),
        pool_size=int(db_config.get("pool_size", 5)),
    )


class DatabaseConnection:
    """Process-wide pooled connection factory.

    Built once at startup (see ``build_container``) and handed to every
    repository. ``connect()`` borrows a pooled connection; closing it returns
    it to the pool. When every pooled connection is in use, a plain
    connection is opened instead so a busy moment never fails a request.
    """

    def __init__(self, config: DBConfig, *, pool_name: str = "attendance_board", pool: Any = None):
        self._config = config
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = pool
        self._lock = threading.Lock()

    def _connect_kwargs(self) -> dict:
        return dict(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            time_zone="+00:00",
        )

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if self._pool is None:
            with self._lock:
                if self._pool is None:
                    self._pool = pooling.MySQLConnectionPool(
                        pool_name=self._pool_name,
                        pool_size=int(self._config.pool_size),
                        **self._connect_kwargs(),
                    )
        return self._pool

    def connect(self):
        try:
            return self._get_pool().get_connection()
        except PoolError:
            log.warning("connection pool exhausted (size=%s); opening a direct connection", self._config.pool_size)
            return mysql.connector.connect(**self._connect_kwargs())
