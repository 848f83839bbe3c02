"""
Fatal-failure reporting for top-level applications.

The mapper raises; it never exits. Scripts and small web handlers that want
the classic "print what went wrong and stop" behavior wrap their work in
:func:`exit_on_failure`:

    with exit_on_failure():
        db = Mapper(config)
        db.persist(user)

A connection failure prints the JSON payload
``{"outcome": false, "message": "Unable to connect"}``. A failed statement
prints the parameter dump followed by the call stack, one ``-``-indented
line per frame, using ``\\n`` line feeds on a console and ``</br>`` when
running under a web gateway (CGI sets ``GATEWAY_INTERFACE``).

Tags:
    diagnostics, error-reporting, exit, rowmap
"""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from rowmap.errors import DatabaseConnectionError, ExecutionError
from rowmap.logging import get_logger

logger = get_logger(__name__)


def is_networked() -> bool:
    """True when running behind a web gateway rather than on a console."""
    return "GATEWAY_INTERFACE" in os.environ


def render_failure(error: ExecutionError, *, html: bool | None = None) -> str:
    """Diagnostic text for a failed statement."""
    if html is None:
        html = is_networked()
    lf = "</br>" if html else "\n"

    parts = [f"Failed to execute statement:{lf}{lf}"]
    parts.append(lf.join(error.params_dump.splitlines()))
    parts.append(lf)
    if error.cause is not None:
        parts.append(f"{type(error.cause).__name__}: {error.cause}{lf}")
    prefix = ""
    for frame in error.trace:
        prefix += "-"
        parts.append(f" {prefix} {frame}{lf}")
    parts.append(lf)
    return "".join(parts)


@contextmanager
def exit_on_failure(stream: TextIO | None = None, *, html: bool | None = None) -> Iterator[None]:
    """Print a diagnostic and exit with status 1 on a connection or statement failure."""
    out = stream or sys.stdout
    try:
        yield
    except DatabaseConnectionError as e:
        logger.critical("exiting_on_failure", **e.to_dict())
        out.write(json.dumps(e.to_payload()))
        out.flush()
        raise SystemExit(1) from e
    except ExecutionError as e:
        logger.critical("exiting_on_failure", **e.to_dict())
        out.write(render_failure(e, html=html))
        out.flush()
        raise SystemExit(1) from e


__all__ = [
    "is_networked",
    "render_failure",
    "exit_on_failure",
]
