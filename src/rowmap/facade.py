"""
The mapper facade: fetch-by-id, raw find, persist and delete.

Manifesto:
    Small applications want ``db.persist(user)`` and ``db.get(7, User)``
    without a schema layer, a session, or a query DSL. Tables are named
    after entity types, columns after entity fields, and every value goes
    through a bound parameter.

    - **One connection:** Opened at construction, held until ``close()``
    - **Atomic calls:** No state carried between operations
    - **Insert or update:** Decided by the ``id`` sentinel (``0`` = transient)
    - **Errors propagate:** Failures raise typed errors to the caller; the
      mapper never exits the process

Architecture:
    ::

        Mapper.persist(entity)
            │
            ├── table_name(type(entity))              entity.py
            ├── RowMapper.extract_fields(entity)      mapper.py  ── sanitize.py
            ├── StatementBuilder.insert / update      statements.py
            ├── Driver.prepare(sql)                   drivers/
            └── ParameterBinder.bind_and_execute      binder.py ── Result

Examples:
    >>> db = Mapper({"driver": "sqlite", "host": "", "dbname": ":memory:",
    ...              "user": "", "password": ""})
    >>> user_id = db.persist(User(name="Bob"))
    >>> db.get(user_id, User)
    User(id=1, name='Bob')

Guardrails:
    ❌ DON'T: Share one Mapper between threads
    ✅ DO: Create one Mapper per thread, or lock around it

    ❌ DON'T: Expect delete() to reset the entity's id
    ✅ DO: Drop or reset the in-memory object yourself after deleting

Tags:
    facade, crud, persistence, rowmap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from rowmap.binder import Criteria, ParameterBinder
from rowmap.drivers import Driver, get_driver
from rowmap.entity import TRANSIENT_ID, get_id, table_name
from rowmap.errors import DatabaseConnectionError
from rowmap.logging import get_logger
from rowmap.mapper import RowMapper
from rowmap.protocols import Row, Statement
from rowmap.settings import ConnectionSettings
from rowmap.statements import StatementBuilder

logger = get_logger(__name__)

E = TypeVar("E")


class Mapper:
    """
    Convention-based persistence for plain entities over one connection.

    Parameters:
        config: Mapping with ``host``, ``dbname``, ``user`` and ``password``
                (optionally ``driver``, ``port``, ``charset``), or a
                :class:`ConnectionSettings`.
        driver: An unconnected driver to use instead of one built from
                ``config``.

    Raises:
        MissingConfigError: A required key is absent from ``config``.
        DatabaseConnectionError: The connection could not be opened.
    """

    def __init__(
        self,
        config: Mapping[str, Any] | ConnectionSettings | None = None,
        *,
        driver: Driver | None = None,
    ):
        if driver is None:
            if config is None:
                raise TypeError("Mapper needs a connection config or a driver")
            settings = (
                config
                if isinstance(config, ConnectionSettings)
                else ConnectionSettings.from_mapping(config)
            )
            driver = get_driver(settings)

        self._driver = driver
        self._binder = ParameterBinder()
        self._rows = RowMapper()
        self._sql = StatementBuilder()

        try:
            self._driver.connect()
        except DatabaseConnectionError as e:
            logger.error("connection_failed", driver=self._driver.name, error=str(e))
            raise

    @property
    def driver(self) -> Driver:
        return self._driver

    # -- Primitives --------------------------------------------------------

    def prepare(self, sql: str) -> Statement:
        """Prepare a statement for :meth:`execute`, :meth:`find_one` or :meth:`find_all`."""
        return self._driver.prepare(sql)

    def execute(self, statement: Statement, criteria: Criteria = ()) -> Statement:
        """Bind ``criteria`` and execute, raising :class:`ExecutionError` on failure."""
        return self._binder.bind_and_execute(statement, criteria).unwrap()

    def last_insert_id(self) -> int:
        """Id generated by the most recent INSERT on this connection."""
        return self._driver.last_insert_id()

    def find_one(self, statement: Statement, criteria: Criteria = ()) -> Row | None:
        """Execute a hand-written statement and fetch one row, or ``None``."""
        return self.execute(statement, criteria).fetch()

    def find_all(self, statement: Statement, criteria: Criteria = ()) -> list[Row]:
        """Execute a hand-written statement and fetch every row."""
        return self.execute(statement, criteria).fetch_all()

    # -- CRUD --------------------------------------------------------------

    def get(self, id: int, entity_type: type[E]) -> E | None:
        """Load the ``entity_type`` row with this id, or ``None`` if there is none."""
        table = table_name(entity_type)
        statement = self._run(self._sql.select_by_id(table), [id], operation="get", table=table)
        try:
            row = statement.fetch()
        finally:
            statement.close()
        if not row:
            return None
        return self._rows.hydrate(row, entity_type)

    def persist(self, entity: Any) -> int:
        """Insert a transient entity or update a persisted one; return its id.

        Inserting writes only the fields that are not ``None`` and returns the
        generated id. The sentinel ``0`` id is written only where the dialect
        treats it as "generate a key" (MySQL); elsewhere the column is left
        out. Updating writes every field, ``id`` included, and returns the
        entity's id. The entity itself is not modified.
        """
        table = table_name(type(entity))
        id = get_id(entity)

        if id == TRANSIENT_ID:
            fields = self._rows.extract_fields(entity, skip_none=True)
            if not self._driver.dialect.binds_sentinel_id:
                fields = [(column, value) for column, value in fields if column != "id"]
            if not fields:
                # A NULL key makes the backend generate one; every other column takes its default
                fields = [("id", None)]
            columns = [column for column, _ in fields]
            self._run(
                self._sql.insert(table, columns),
                [value for _, value in fields],
                operation="persist",
                table=table,
            ).close()
            new_id = self.last_insert_id()
            logger.info("entity_persisted", action="insert", table=table, id=new_id, fields=len(columns))
            return new_id

        fields = self._rows.extract_fields(entity)
        self._run(
            self._sql.update(table, [column for column, _ in fields], id),
            [value for _, value in fields],
            operation="persist",
            table=table,
        ).close()
        logger.info("entity_persisted", action="update", table=table, id=id, fields=len(fields))
        return id

    def delete(self, entity: Any) -> Statement:
        """Delete the entity's row and return the executed statement.

        The statement is left open so the caller can read ``rowcount``; the
        in-memory entity keeps its id.
        """
        table = table_name(type(entity))
        id = get_id(entity)
        statement = self._run(self._sql.delete_by_id(table), [id], operation="delete", table=table)
        logger.info("entity_deleted", table=table, id=id)
        return statement

    def _run(self, sql: str, criteria: Criteria, **context: Any) -> Statement:
        result = self._binder.bind_and_execute(self.prepare(sql), criteria)
        if result.is_err():
            raise result.error.with_context(**context)
        return result.unwrap()

    # -- Lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Release the connection."""
        self._driver.disconnect()

    def __enter__(self) -> Mapper:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "Mapper",
]
