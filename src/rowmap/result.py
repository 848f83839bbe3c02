"""
Result envelope for statement execution.

The binder reports the outcome of every execution as ``Ok[T]`` or ``Err[T]``
instead of terminating or raising from deep inside the driver layer. The
facade decides what to do with an ``Err``: it adds context to the carried
error and raises it to the caller.

Manifesto:
    - **Explicit over Implicit:** Failure is a value the caller receives
    - **No crash-only paths:** Process termination is an application choice

Architecture:
    ::

        ┌─────────────────┬─────────────────────┐
        │     Ok[T]       │     Err[T]          │
        ├─────────────────┼─────────────────────┤
        │ • value: T      │ • error: Exception  │
        │ • unwrap()      │ • unwrap() raises   │
        └─────────────────┴─────────────────────┘

Examples:
    >>> Ok(5).unwrap()
    5
    >>> Err(ValueError("boom")).is_err()
    True

Tags:
    result-pattern, error-handling, rowmap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    ``unwrap()`` raises the carried error, so a caller that does not care
    about recovery gets ordinary exception propagation.
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Ok[T] | Err[T]


__all__ = [
    "Ok",
    "Err",
    "Result",
]
