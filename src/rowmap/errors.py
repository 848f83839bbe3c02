"""
Structured error types for rowmap.

Every failure the mapper can report is a :class:`RowmapError` subclass that
carries a category, a retryable flag, structured context and the chained
driver exception. Nothing in the persistence layer terminates the process:
errors travel to the caller, and only a top-level application decides to
exit (see :mod:`rowmap.diagnostics`).

Manifesto:
    - **Typed hierarchy:** Connection, configuration, execution and mapping
      failures are distinct types
    - **Rich context:** Execution errors carry the SQL, the bound parameter
      dump and the call stack captured at the point of failure
    - **Error chaining:** The driver exception is preserved as ``cause``
    - **No crash-only paths:** The layer raises, the application exits

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        RowmapError                           │
        │  (category, retryable, context, cause)                       │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ConfigError            DatabaseConnectionError              │
        │  (CONFIG)               (DATABASE, retryable)                │
        │     │                                                        │
        │  MissingConfigError     DatabaseError       MappingError     │
        │  InvalidConfigError     (DATABASE)          (MAPPING)        │
        │                            │                                 │
        │                         ExecutionError                       │
        │                            │                                 │
        │                         BindError                            │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = ExecutionError("Failed to execute statement", sql="SELECT 1")
    >>> error.category
    <ErrorCategory.DATABASE: 'DATABASE'>
    >>> error.with_context(table="user").context.metadata["table"]
    'user'

Tags:
    error-handling, exception-hierarchy, error-context, rowmap

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    DATABASE = "DATABASE"         # Connection, statement execution
    CONFIG = "CONFIG"             # Missing or invalid connection config
    MAPPING = "MAPPING"           # Entity contract violations
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        table: Table the failing operation targeted
        operation: Facade operation name (``get``, ``persist``, ...)
        entity_type: Entity class name
        metadata: Additional key-value pairs
    """

    table: str | None = None
    operation: str | None = None
    entity_type: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["table", "operation", "entity_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RowmapError(Exception):
    """
    Base exception for all rowmap errors.

    Subclasses set ``default_category`` and ``default_retryable`` to give
    sensible defaults for their domain.

    Examples:
        >>> error = RowmapError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.retryable
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RowmapError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ExecutionError("Failed").with_context(
                table="user",
                operation="persist",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(RowmapError):
    """
    Configuration error.

    Never retryable - configuration must be fixed.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class MissingConfigError(ConfigError):
    """Required connection setting is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required connection setting: {key}")


class InvalidConfigError(ConfigError):
    """Connection setting has an invalid value."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid value for connection setting {key}: {value!r}")


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseConnectionError(RowmapError):
    """Driver could not establish a connection."""

    default_category = ErrorCategory.DATABASE
    default_retryable = True

    def to_payload(self) -> dict[str, Any]:
        """Failure payload emitted by applications that exit on connect failure."""
        return {"outcome": False, "message": "Unable to connect"}


class DatabaseError(RowmapError):
    """Database statement error."""

    default_category = ErrorCategory.DATABASE
    default_retryable = False


class ExecutionError(DatabaseError):
    """
    A prepared statement failed to execute.

    Carries everything needed to render the failure diagnostic: the SQL,
    the statement's bound parameter dump, and the call stack captured where
    execution failed.
    """

    def __init__(
        self,
        message: str,
        *,
        sql: str | None = None,
        params_dump: str = "",
        trace: list[str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.sql = sql
        self.params_dump = params_dump
        self.trace = trace or []

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.sql is not None:
            result["sql"] = self.sql
        return result


class BindError(ExecutionError):
    """A criteria value could not be bound onto the statement."""

    pass


# =============================================================================
# MAPPING ERRORS
# =============================================================================


class MappingError(RowmapError):
    """Entity does not satisfy the persisted-field contract."""

    default_category = ErrorCategory.MAPPING
    default_retryable = False


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RowmapError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "DatabaseConnectionError",
    "DatabaseError",
    "ExecutionError",
    "BindError",
    "MappingError",
]
