"""Row ⇄ entity conversion."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from rowmap.entity import build, describe, unbuild
from rowmap.logging import get_logger
from rowmap.sanitize import sanitize

logger = get_logger(__name__)

E = TypeVar("E")


class RowMapper:
    """
    Converts fetched rows into entities and entities into ordered values.

    Entities that provide ``from_row`` / ``to_row`` are converted through
    them; any other object is handled through its field descriptor table.
    """

    def extract_fields(self, entity: Any, *, skip_none: bool = False) -> list[tuple[str, Any]]:
        """Entity fields as ``(column, value)`` pairs in declaration order.

        Column names are sanitized; with ``skip_none`` fields holding ``None``
        are left out.
        """
        to_row = getattr(entity, "to_row", None)
        row = to_row() if callable(to_row) else unbuild(entity)
        return [
            (sanitize(column), value)
            for column, value in row.items()
            if not (skip_none and value is None)
        ]

    def hydrate(self, row: Mapping[str, Any], entity_type: type[E]) -> E:
        """Build a new ``entity_type`` from a fetched row.

        Columns without a matching field are ignored.
        """
        known = {d.column.lower() for d in describe(entity_type)}
        unknown = [column for column in row if str(column).lower() not in known]
        if unknown:
            logger.debug("columns_ignored", entity_type=entity_type.__name__, columns=unknown)

        from_row = getattr(entity_type, "from_row", None)
        if callable(from_row):
            return from_row(row)
        return build(entity_type, row)


__all__ = [
    "RowMapper",
]
