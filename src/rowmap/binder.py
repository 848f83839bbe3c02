"""
Parameter binding and statement execution.

Criteria come in two shapes. A criteria set whose keys are exactly
``{0, 1, ..., n-1}`` (any list or tuple, or a dict keyed that way) is
**positional**: each key is shifted by one because driver positions are
1-based. Any other key shape is **named**: keys are passed through verbatim.

Values are bound as text when they are strings, as SQL NULL when ``None``,
and as integers otherwise. Execution failure is reported as an
:class:`~rowmap.result.Err` carrying an :class:`~rowmap.errors.ExecutionError`
with the statement's parameter dump and the call stack at the failure.

Examples:
    >>> is_positional([10, "a"])
    True
    >>> is_positional({1: "a", 2: "b"})
    False
    >>> is_positional({"id": 5})
    False

Tags:
    binding, prepared-statement, paramstyle, rowmap
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping, Sequence
from typing import Any

from rowmap.errors import BindError, ExecutionError
from rowmap.logging import get_logger
from rowmap.protocols import ParamType, Statement
from rowmap.result import Err, Ok, Result

logger = get_logger(__name__)

Criteria = Sequence[Any] | Mapping[int | str, Any]


def _items(criteria: Criteria) -> list[tuple[int | str, Any]]:
    if isinstance(criteria, Mapping):
        return list(criteria.items())
    return list(enumerate(criteria))


def is_positional(criteria: Criteria) -> bool:
    """True iff the criteria keys are exactly ``{0, ..., n-1}``."""
    keys = [key for key, _ in _items(criteria)]
    if any(isinstance(key, bool) or not isinstance(key, int) for key in keys):
        return False
    return set(keys) == set(range(len(keys)))


def coerce(value: Any) -> tuple[Any, ParamType]:
    """Pick the bind type for a value: text, NULL, or integer."""
    if isinstance(value, str):
        return value, ParamType.STR
    if value is None:
        return None, ParamType.NULL
    return int(value), ParamType.INT


def _trace() -> list[str]:
    # Innermost frame first, the binder's own frame dropped
    frames = traceback.extract_stack()[:-2]
    return [f"{frame.filename} line {frame.lineno}" for frame in reversed(frames)]


class ParameterBinder:
    """Binds criteria onto a prepared statement and executes it."""

    def bind_and_execute(self, statement: Statement, criteria: Criteria = ()) -> Result[Statement]:
        positional = is_positional(criteria)

        for key, raw in _items(criteria):
            if positional:
                key = key + 1
            try:
                value, param_type = coerce(raw)
            except (TypeError, ValueError) as e:
                error = BindError(
                    f"Cannot bind {type(raw).__name__} value to parameter {key!r}",
                    sql=statement.sql,
                    params_dump=statement.debug_dump_params(),
                    trace=_trace(),
                    cause=e,
                )
                logger.error("statement_bind_failed", sql=statement.sql, key=key, value_type=type(raw).__name__)
                return Err(error)
            statement.bind_value(key, value, param_type)

        if statement.execute():
            return Ok(statement)

        cause = statement.error
        error = ExecutionError(
            f"Failed to execute statement: {cause}" if cause else "Failed to execute statement",
            sql=statement.sql,
            params_dump=statement.debug_dump_params(),
            trace=_trace(),
            cause=cause,
        )
        logger.error(
            "statement_failed",
            sql=statement.sql,
            mode="positional" if positional else "named",
            error=str(cause),
        )
        return Err(error)


__all__ = [
    "Criteria",
    "ParameterBinder",
    "is_positional",
    "coerce",
]
