"""
Structural protocols for the driver boundary.

The binder and the facade only need a prepared statement's
bind/execute/fetch primitives. Any object with this shape works, which keeps
the engine testable without a database.

Architecture:
    ::

        Statement Protocol:
        ┌────────────────────────────────────────────────────────┐
        │ sql                          → statement text           │
        │ bind_value(key, value, type) → bind one parameter       │
        │ execute()                    → True / False             │
        │ fetch()                      → one row dict or None     │
        │ fetch_all()                  → list of row dicts        │
        │ debug_dump_params()          → parameter dump text      │
        │ error                        → driver error, if failed  │
        │ close()                      → release the cursor       │
        └────────────────────────────────────────────────────────┘

Tags:
    protocol, statement, database, rowmap
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, runtime_checkable

Row = dict[str, Any]


class ParamType(str, Enum):
    """How a value is bound onto a statement."""

    NULL = "null"
    INT = "int"
    STR = "str"


@runtime_checkable
class Statement(Protocol):
    """Prepared statement handle owned by the call that created it."""

    sql: str
    error: Exception | None

    def bind_value(self, key: int | str, value: Any, param_type: ParamType = ParamType.STR) -> None:
        """Bind a value to a 1-based position or a parameter name."""
        ...

    def execute(self) -> bool:
        """Execute with the bound values. Returns False on failure."""
        ...

    def fetch(self) -> Row | None:
        """Fetch the next row as a column-name mapping."""
        ...

    def fetch_all(self) -> list[Row]:
        """Fetch all remaining rows."""
        ...

    def debug_dump_params(self) -> str:
        """Human-readable dump of the statement and its bound parameters."""
        ...

    def close(self) -> None:
        """Release the cursor held by the last execution."""
        ...


__all__ = [
    "Row",
    "ParamType",
    "Statement",
]
