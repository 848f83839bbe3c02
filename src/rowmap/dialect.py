"""SQL dialect abstraction for the driver layer.

Generated and hand-written statements are always written with ``?``
(positional) or ``:name`` (named) placeholders and unquoted lowercase
identifiers. A ``Dialect`` turns that text into what a specific driver
accepts and knows how to ask the backend for the last generated key.

Architecture::

    Mapper SQL:  SELECT * FROM user WHERE id = ?
                              │
                              ▼
    ┌──────────────────────┐      ┌───────────────────────────┐
    │ SQLite               │      │ MySQL                     │
    │ ?, :name  (native)   │      │ %s, %(name)s  (translated)│
    │ last_insert_rowid()  │      │ LAST_INSERT_ID()          │
    └──────────────────────┘      └───────────────────────────┘

Examples:
    >>> MySQLDialect().translate("SELECT * FROM user WHERE id = ? AND name = :name")
    'SELECT * FROM user WHERE id = %s AND name = %(name)s'
    >>> SQLiteDialect().translate("SELECT * FROM user WHERE id = ?")
    'SELECT * FROM user WHERE id = ?'

Tags:
    dialect, sql, paramstyle, portability, rowmap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

# Quoted literal | positional placeholder | named placeholder
_TOKEN = re.compile(
    r"""('(?:[^'\\]|\\.|'')*'|"(?:[^"\\]|\\.)*"|`[^`]*`)"""
    r"""|(\?)"""
    r"""|(?<!:):([A-Za-z_]\w*)"""
)


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract."""

    @property
    def name(self) -> str:
        """Human-readable dialect name (e.g. ``'sqlite'``)."""
        ...

    def translate(self, sql: str) -> str:
        """Rewrite ``?`` / ``:name`` placeholders into the driver's paramstyle."""
        ...

    def last_insert_id_sql(self) -> str:
        """Query returning the key generated by the last INSERT on the connection."""
        ...

    @property
    def binds_sentinel_id(self) -> bool:
        """Whether an INSERT of a transient entity writes its ``0`` id.

        True where the backend treats an explicit ``0`` in an auto-increment
        key as "generate one"; otherwise the id column is left out.
        """
        ...


class SQLiteDialect:
    """SQLite dialect: ``qmark`` and ``named`` paramstyles are native."""

    @property
    def name(self) -> str:
        return "sqlite"

    def translate(self, sql: str) -> str:
        return sql

    def last_insert_id_sql(self) -> str:
        return "SELECT last_insert_rowid()"

    @property
    def binds_sentinel_id(self) -> bool:
        # An explicit 0 would be stored as the key
        return False


class MySQLDialect:
    """MySQL dialect: ``%s`` / ``%(name)s`` (``mysql.connector`` paramstyles).

    Placeholders inside quoted literals are left alone.
    """

    @property
    def name(self) -> str:
        return "mysql"

    def translate(self, sql: str) -> str:
        def _sub(match: re.Match[str]) -> str:
            literal, positional, named = match.groups()
            if literal is not None:
                return literal
            if positional is not None:
                return "%s"
            return f"%({named})s"

        return _TOKEN.sub(_sub, sql)

    def last_insert_id_sql(self) -> str:
        return "SELECT LAST_INSERT_ID()"

    @property
    def binds_sentinel_id(self) -> bool:
        return True


_DIALECTS: dict[str, Dialect] = {
    "sqlite": SQLiteDialect(),
    "mysql": MySQLDialect(),
    "mariadb": MySQLDialect(),
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by database type name.

    Raises:
        ValueError: If ``db_type`` is not recognised.
    """
    key = db_type.lower()
    if key not in _DIALECTS:
        raise ValueError(
            f"Unknown dialect '{db_type}'. "
            f"Supported: {sorted(_DIALECTS)}"
        )
    return _DIALECTS[key]


__all__ = [
    "Dialect",
    "SQLiteDialect",
    "MySQLDialect",
    "get_dialect",
]
