"""
Shared pytest fixtures and configuration for rowmap tests.

This module provides:
- SQLite connection configs and a ready ``Mapper`` with a ``user`` table
- Location-based markers (integration vs. unit)
"""

from pathlib import Path
from typing import Any, Generator

import pytest

from rowmap import Mapper
from tests._support import USERS_DDL


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def sqlite_config(tmp_path: Path) -> dict[str, Any]:
    """Connection mapping for a throwaway SQLite file."""
    return {
        "driver": "sqlite",
        "host": "localhost",
        "dbname": str(tmp_path / "rowmap.db"),
        "user": "test",
        "password": "test",
    }


@pytest.fixture
def db(sqlite_config: dict[str, Any]) -> Generator[Mapper, None, None]:
    """Mapper over a SQLite database with an empty ``user`` table."""
    mapper = Mapper(sqlite_config)
    mapper.execute(mapper.prepare(USERS_DDL))
    yield mapper
    mapper.close()
