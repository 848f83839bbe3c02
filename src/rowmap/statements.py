"""
SQL text for the single-table CRUD operations.

Identifiers are unquoted and assumed lowercase; every value except the
UPDATE's target id is a ``?`` placeholder.

Examples:
    >>> builder = StatementBuilder()
    >>> builder.insert("user", ["name", "email"])
    'INSERT INTO user (name,email) VALUES (?,?)'
    >>> builder.update("user", ["id", "name"], 5)
    'UPDATE user SET id = ?,name = ? WHERE id = 5'
"""

from __future__ import annotations

from collections.abc import Sequence

from rowmap.errors import MappingError


class StatementBuilder:
    """Builds SELECT/INSERT/UPDATE/DELETE statements for one table."""

    def select_by_id(self, table: str) -> str:
        return f"SELECT * FROM {table} WHERE id = ?"

    def insert(self, table: str, columns: Sequence[str]) -> str:
        """``INSERT`` with one ``?`` per column."""
        if not columns:
            raise MappingError(f"Nothing to insert into {table}: no non-null fields")
        fields = ",".join(columns)
        placeholders = ",".join("?" for _ in columns)
        return f"INSERT INTO {table} ({fields}) VALUES ({placeholders})"

    def update(self, table: str, columns: Sequence[str], id: int) -> str:
        """``UPDATE`` binding every column, targeting ``id`` as a literal."""
        if not columns:
            raise MappingError(f"Nothing to update in {table}: no fields")
        assignments = ",".join(f"{column} = ?" for column in columns)
        return f"UPDATE {table} SET {assignments} WHERE id = {int(id)}"

    def delete_by_id(self, table: str) -> str:
        return f"DELETE FROM {table} WHERE id = ?"


__all__ = [
    "StatementBuilder",
]
