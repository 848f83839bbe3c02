"""MySQL database driver.

Uses ``mysql.connector`` from the ``mysql-connector-python`` package.
Statements written with ``?`` / ``:name`` placeholders are translated to the
driver's ``%s`` / ``%(name)s`` style by :class:`~rowmap.dialect.MySQLDialect`.

Install the driver::

    pip install mysql-connector-python
    # or:  pip install rowmap[mysql]

This driver is import-guarded: if ``mysql.connector`` is not installed
a clear :class:`~rowmap.errors.ConfigError` is raised at ``connect()`` time.
"""

from __future__ import annotations

from typing import Any

from rowmap.errors import ConfigError, DatabaseConnectionError
from rowmap.logging import get_logger

from .base import Driver

logger = get_logger(__name__)


def _connector() -> Any:
    try:
        import mysql.connector
    except ImportError:
        raise ConfigError(
            "mysql-connector-python is required for MySQL. "
            "Install with: pip install mysql-connector-python"
        ) from None
    return mysql.connector


class MySQLDriver(Driver):
    """MySQL / MariaDB database driver.

    One connection, autocommit on, ``utf8mb4`` by default.
    """

    name = "mysql"

    def __init__(self, settings, *, connect_timeout: int = 10):
        super().__init__(settings)
        self._connect_timeout = connect_timeout
        self._conn: Any = None

    @property
    def errors(self) -> tuple[type[Exception], ...]:
        return (_connector().Error,)

    def connect(self) -> None:
        """Connect to MySQL database."""
        connector = _connector()
        settings = self._settings

        try:
            self._conn = connector.connect(
                host=settings.host,
                port=settings.port or 3306,
                database=settings.dbname,
                user=settings.user,
                password=settings.password,
                charset=settings.charset,
                connection_timeout=self._connect_timeout,
                autocommit=True,
            )
            self._connected = True
        except connector.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to MySQL: {e}",
                cause=e,
            ) from e

        logger.info("driver_connected", driver=self.name, host=settings.host, dbname=settings.dbname)

    def disconnect(self) -> None:
        """Close MySQL connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
        self._connected = False

    def cursor(self) -> Any:
        if not self._conn:
            self.connect()
        # Buffered so an unread result never blocks the next statement
        return self._conn.cursor(buffered=True)


__all__ = [
    "MySQLDriver",
]
