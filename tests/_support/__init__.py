"""
Test support utilities for rowmap tests.

Entities shared across test modules, and a recording statement double that
satisfies the ``Statement`` protocol without a database.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rowmap.entity import Entity
from rowmap.protocols import ParamType

USERS_DDL = """
    CREATE TABLE user (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT,
        email TEXT DEFAULT 'unknown@example.com',
        age INTEGER
    )
"""


@dataclass
class User(Entity):
    name: str | None = None
    email: str | None = None
    age: int | None = None


@dataclass
class Account(Entity):
    __table__ = "accounts"

    owner: str | None = None


class LegacyUser:
    """Entity written with explicit accessors instead of a dataclass."""

    __fields__ = ("id", "name")

    def __init__(self):
        self._id = 0
        self._name = None

    def get_id(self):
        return self._id

    def set_id(self, value):
        self._id = value

    def get_name(self):
        return self._name

    def set_name(self, value):
        self._name = value


class RecordingStatement:
    """Statement double that records bindings and returns canned rows."""

    def __init__(self, sql: str = "SELECT 1", *, succeed: bool = True, rows: list[dict] | None = None):
        self.sql = sql
        self.error: Exception | None = None if succeed else RuntimeError("syntax error")
        self.bound: dict[int | str, tuple[Any, ParamType]] = {}
        self.executed = False
        self.closed = False
        self._succeed = succeed
        self._rows = list(rows or [])

    def bind_value(self, key, value, param_type=ParamType.STR):
        self.bound[key] = (value, param_type)

    def execute(self) -> bool:
        self.executed = True
        return self._succeed

    def fetch(self):
        return self._rows.pop(0) if self._rows else None

    def fetch_all(self):
        rows, self._rows = self._rows, []
        return rows

    def debug_dump_params(self) -> str:
        return f"SQL: [{len(self.sql)}] {self.sql}\nParams:  {len(self.bound)}"

    def close(self) -> None:
        self.closed = True
