"""Identifier normalization for generated SQL.

Field names reach generated SQL text by interpolation, so they pass through
:func:`sanitize` first. Values never do; they are always bound.
"""

from __future__ import annotations

import re

_WILDCARDS = re.compile(r"\*+")
_UNESCAPED_THIRD = re.compile(r"(?<!\\)⅓")

# Characters stripped from both ends, including NUL
_TRIM = " \t\n\r\0\x0b"


def sanitize(name: str) -> str:
    """Normalize a column name before it is spliced into SQL.

    Removes runs of ``*``, trims whitespace and NUL bytes, and escapes ``⅓``
    with a backslash. Idempotent.

    >>> sanitize("*col*")
    'col'
    >>> sanitize(sanitize(" a⅓ "))
    'a\\\\⅓'
    """
    name = _WILDCARDS.sub("", name).strip(_TRIM)
    name = _UNESCAPED_THIRD.sub(r"\\⅓", name)
    return name.strip(_TRIM)


__all__ = [
    "sanitize",
]
