"""SQLite database driver."""

from __future__ import annotations

import sqlite3
from typing import Any

from rowmap.errors import DatabaseConnectionError
from rowmap.logging import get_logger

from .base import Driver

logger = get_logger(__name__)


class SQLiteDriver(Driver):
    """
    SQLite database driver.

    Uses the built-in sqlite3 module. ``dbname`` is the database path
    (``:memory:`` for an in-memory database); host and credentials are
    ignored. Runs in autocommit mode since the mapper has no transactions.
    Suitable for:
    - Development and testing
    - Single-process applications
    """

    name = "sqlite"

    def __init__(self, settings, *, timeout: float = 5.0):
        super().__init__(settings)
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None

    @property
    def errors(self) -> tuple[type[Exception], ...]:
        return (sqlite3.Error,)

    def connect(self) -> None:
        """Connect to SQLite database."""
        path = self._settings.dbname or ":memory:"
        uri = path.startswith("file:")

        try:
            self._conn = sqlite3.connect(
                path,
                timeout=self._timeout,
                isolation_level=None,
                uri=uri,
            )
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._connected = True
        except sqlite3.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to SQLite: {e}",
                cause=e,
            ) from e

        logger.info("driver_connected", driver=self.name, path=path)

    def disconnect(self) -> None:
        """Close SQLite connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
            self._connected = False

    def cursor(self) -> Any:
        if not self._conn:
            self.connect()
        return self._conn.cursor()


__all__ = [
    "SQLiteDriver",
]
