"""
Structured logging for rowmap.

Every module logs through ``get_logger(__name__)``; applications call
``configure_logging()`` once at startup. Events are snake_case names with
keyword fields (``statement_executed``, ``statement_failed``,
``entity_persisted``), so the output can be aggregated as JSON or read on a
console during development. Statement text in the ``sql`` field is flattened
onto one line and truncated.

Examples:
    >>> from rowmap.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False)
    >>> logger = get_logger(__name__)
    >>> logger.debug("statement_executed", sql="SELECT 1", params=0)

Tags:
    logging, structlog, observability, rowmap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

LOG_LEVEL_ENV = "ROWMAP_LOG_LEVEL"

# Longest ``sql`` field written to a log line
DEFAULT_MAX_SQL_LENGTH = 500


# Store service name for metadata
_SERVICE_NAME = "rowmap"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def compact_sql(max_length: int = DEFAULT_MAX_SQL_LENGTH) -> Processor:
    """Processor that flattens the ``sql`` field onto one line and caps its length.

    Generated and hand-written statements (DDL especially) span several
    lines; a log line should not.
    """

    def _compact(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        sql = event_dict.get("sql")
        if isinstance(sql, str):
            sql = " ".join(sql.split())
            if len(sql) > max_length:
                sql = sql[:max_length] + "..."
            event_dict["sql"] = sql
        return event_dict

    return _compact


def _resolve_level(level: str | None) -> int:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {name}")
    return value


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    service: str = "rowmap",
    add_timestamp: bool = True,
    max_sql_length: int = DEFAULT_MAX_SQL_LENGTH,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); ``ROWMAP_LOG_LEVEL``
               or INFO when None
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
        max_sql_length: Truncate logged statements beyond this many characters
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    min_level = _resolve_level(level)

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
        compact_sql(max_sql_length),
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger.

    The name travels as the ``logger_name`` field; ``PrintLogger`` has no
    name of its own. The returned logger stays lazy, so module-level loggers
    pick up a later ``configure_logging()``.

    Args:
        name: Logger name (usually __name__)
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()


__all__ = [
    "LOG_LEVEL_ENV",
    "configure_logging",
    "compact_sql",
    "get_logger",
]
