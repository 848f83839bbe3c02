"""Tests for ``rowmap.drivers.statement``: the prepared statement handle."""

from __future__ import annotations

import pytest

from rowmap.drivers import PreparedStatement, SQLiteDriver
from rowmap.protocols import ParamType, Statement
from rowmap.settings import ConnectionSettings


@pytest.fixture
def driver():
    settings = ConnectionSettings(driver="sqlite", host="", dbname=":memory:", user="", password="")
    driver = SQLiteDriver(settings)
    driver.connect()
    driver.run("CREATE TABLE item (id INTEGER PRIMARY KEY, label TEXT)").close()
    driver.run("INSERT INTO item (label) VALUES ('a'), ('b')").close()
    yield driver
    driver.disconnect()


class TestBinding:
    def test_satisfies_protocol(self, driver):
        assert isinstance(driver.prepare("SELECT 1"), Statement)

    def test_positional(self, driver):
        statement = driver.prepare("SELECT * FROM item WHERE id = ?")
        statement.bind_value(1, 2, ParamType.INT)
        assert statement.execute() is True
        assert statement.fetch() == {"id": 2, "label": "b"}

    def test_named_strips_colon(self, driver):
        statement = driver.prepare("SELECT * FROM item WHERE label = :label")
        statement.bind_value(":label", "a")
        assert statement.params == {"label": "a"}
        assert statement.execute() is True
        assert statement.fetch_all() == [{"id": 1, "label": "a"}]

    def test_non_dense_positions_fail(self, driver):
        statement = driver.prepare("SELECT * FROM item WHERE id = ?")
        statement.bind_value(2, 1, ParamType.INT)
        assert statement.execute() is False
        assert isinstance(statement.error, ValueError)

    def test_mixed_keys_fail(self, driver):
        statement = driver.prepare("SELECT * FROM item WHERE id = ? OR label = :label")
        statement.bind_value(1, 1, ParamType.INT)
        statement.bind_value("label", "a")
        assert statement.execute() is False
        assert isinstance(statement.error, ValueError)


class TestExecution:
    def test_driver_error_recorded(self, driver):
        statement = driver.prepare("SELEC nonsense")
        assert statement.execute() is False
        assert statement.error is not None

    def test_error_cleared_on_success(self, driver):
        statement = driver.prepare("SELECT * FROM item WHERE id = ?")
        assert statement.execute() is False
        statement.bind_value(1, 1, ParamType.INT)
        assert statement.execute() is True
        assert statement.error is None

    def test_fetch_exhausted(self, driver):
        statement = driver.prepare("SELECT * FROM item WHERE id = 99")
        statement.execute()
        assert statement.fetch() is None
        assert statement.fetch_all() == []

    def test_fetch_before_execute(self, driver):
        statement = driver.prepare("SELECT 1")
        assert statement.fetch() is None
        assert statement.fetch_all() == []
        assert statement.rowcount == -1

    def test_rowcount(self, driver):
        statement = driver.prepare("UPDATE item SET label = ?")
        statement.bind_value(1, "z")
        statement.execute()
        assert statement.rowcount == 2


class TestDebugDump:
    def test_positional(self, driver):
        statement = driver.prepare("SELECT ?")
        statement.bind_value(1, 5, ParamType.INT)
        assert statement.debug_dump_params() == (
            "SQL: [8] SELECT ?\n"
            "Params:  1\n"
            "Key: Position #1:\n"
            "param_type=int\n"
            "value=5"
        )

    def test_named(self, driver):
        statement = driver.prepare("SELECT :id")
        statement.bind_value("id", None, ParamType.NULL)
        dump = statement.debug_dump_params()
        assert "Key: Name: [3] :id" in dump
        assert "param_type=null" in dump

    def test_repr(self, driver):
        assert repr(PreparedStatement(driver, "SELECT 1")) == "PreparedStatement('SELECT 1', params=0)"
