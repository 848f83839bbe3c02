"""Database driver base class.

Manifesto:
    The mapper talks to exactly one connection through a small set of
    primitives: prepare a statement, run it, ask for the last generated key.
    Each backend implements connect/disconnect and a cursor factory; SQL
    translation comes from its :class:`~rowmap.dialect.Dialect`.

Features:
    - Abstract ``connect()``, ``disconnect()``, ``cursor()``
    - ``prepare()`` returns a fresh :class:`PreparedStatement` per call
    - ``last_insert_id()`` via the dialect's query
    - Context-manager protocol for connection lifecycle

Tags:
    rowmap, database, abstract-base, driver

Doc-Types:
    api-reference
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from rowmap.dialect import Dialect, get_dialect
from rowmap.logging import get_logger
from rowmap.settings import ConnectionSettings

from .statement import PreparedStatement

logger = get_logger(__name__)


class Driver(ABC):
    """
    Abstract base class for database drivers.

    One driver owns one connection. It is not safe to share between threads
    without external locking.
    """

    name: ClassVar[str]

    def __init__(self, settings: ConnectionSettings):
        self._settings = settings
        self._connected = False
        self._dialect: Dialect = get_dialect(self.name)

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this driver."""
        return self._dialect

    @property
    def settings(self) -> ConnectionSettings:
        return self._settings

    @property
    def is_connected(self) -> bool:
        """Whether the driver holds an open connection."""
        return self._connected

    @property
    @abstractmethod
    def errors(self) -> tuple[type[Exception], ...]:
        """Driver exception types that mean a statement failed."""
        ...

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to database."""
        ...

    @abstractmethod
    def cursor(self) -> Any:
        """Open a new DB-API cursor on the connection."""
        ...

    def prepare(self, sql: str) -> PreparedStatement:
        """Prepare a statement owned by the caller."""
        return PreparedStatement(self, sql)

    def run(self, sql: str, params: tuple | dict = ()) -> Any:
        """Execute translated SQL on a new cursor and return the cursor."""
        cursor = self.cursor()
        try:
            cursor.execute(self._dialect.translate(sql), params)
        except Exception:
            cursor.close()
            raise
        logger.debug("statement_executed", driver=self.name, sql=sql, params=len(params))
        return cursor

    def last_insert_id(self) -> int:
        """Key generated by the most recent INSERT on this connection."""
        cursor = self.run(self._dialect.last_insert_id_sql())
        try:
            row = cursor.fetchone()
        finally:
            cursor.close()
        if not row or row[0] is None:
            return 0
        return int(row[0])

    def __enter__(self) -> Driver:
        """Context manager entry."""
        if not self._connected:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()


__all__ = [
    "Driver",
]
