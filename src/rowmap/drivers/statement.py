"""Prepared statement handle for the built-in drivers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rowmap.logging import get_logger
from rowmap.protocols import ParamType, Row

if TYPE_CHECKING:
    from .base import Driver

logger = get_logger(__name__)


class PreparedStatement:
    """
    SQL text plus the values bound to it.

    Values are bound by 1-based position (``int`` keys) or by name (``str``
    keys, a leading ``:`` is dropped). ``execute()`` never raises for driver
    or binding-shape failures: it records the exception on :attr:`error` and
    returns ``False`` so the caller decides how to report it.
    """

    def __init__(self, driver: Driver, sql: str):
        self.sql = sql
        self.error: Exception | None = None
        self._driver = driver
        self._params: dict[int | str, tuple[Any, ParamType]] = {}
        self._cursor: Any = None

    def bind_value(self, key: int | str, value: Any, param_type: ParamType = ParamType.STR) -> None:
        if isinstance(key, str):
            key = key.lstrip(":")
        self._params[key] = (value, param_type)

    @property
    def params(self) -> dict[int | str, Any]:
        """Bound values keyed by position or name."""
        return {key: value for key, (value, _) in self._params.items()}

    def execute(self) -> bool:
        self.error = None
        self.close()
        try:
            self._cursor = self._driver.run(self.sql, self._collect())
        except (ValueError, *self._driver.errors) as e:
            self.error = e
            return False
        return True

    def _collect(self) -> tuple[Any, ...] | dict[str, Any]:
        if not self._params:
            return ()
        keys = list(self._params)
        if all(isinstance(key, int) for key in keys):
            ordered = sorted(keys)
            if ordered != list(range(1, len(ordered) + 1)):
                raise ValueError(f"Positional parameters must be numbered 1..n, got {ordered}")
            return tuple(self._params[key][0] for key in ordered)
        if all(isinstance(key, str) for key in keys):
            return {key: value for key, (value, _) in self._params.items()}
        raise ValueError("Cannot mix positional and named parameters in one statement")

    def fetch(self) -> Row | None:
        if self._cursor is None or self._cursor.description is None:
            return None
        row = self._cursor.fetchone()
        if row is None:
            return None
        return self._as_dict(row)

    def fetch_all(self) -> list[Row]:
        if self._cursor is None or self._cursor.description is None:
            return []
        return [self._as_dict(row) for row in self._cursor.fetchall()]

    def _as_dict(self, row: Any) -> Row:
        columns = [desc[0] for desc in self._cursor.description]
        return dict(zip(columns, row, strict=False))

    @property
    def rowcount(self) -> int:
        """Rows affected by the last execution, -1 when unknown."""
        if self._cursor is None:
            return -1
        return self._cursor.rowcount

    def close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None

    def debug_dump_params(self) -> str:
        lines = [f"SQL: [{len(self.sql)}] {self.sql}", f"Params:  {len(self._params)}"]
        for key, (value, param_type) in self._params.items():
            if isinstance(key, int):
                lines.append(f"Key: Position #{key}:")
            else:
                lines.append(f"Key: Name: [{len(key) + 1}] :{key}")
            lines.append(f"param_type={param_type.value}")
            lines.append(f"value={value!r}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"PreparedStatement({self.sql!r}, params={len(self._params)})"


__all__ = [
    "PreparedStatement",
]
