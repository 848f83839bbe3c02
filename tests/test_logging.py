"""Tests for ``rowmap.logging``."""

from __future__ import annotations

import json

import pytest
import structlog

from rowmap.logging import compact_sql, configure_logging, get_logger


def _last_record(capsys) -> dict:
    return json.loads(capsys.readouterr().out.strip().splitlines()[-1])


class TestGetLogger:
    def teardown_method(self):
        structlog.reset_defaults()

    def test_named_logger_logs(self, capsys):
        get_logger("rowmap.binder").info("statement_executed")
        assert "statement_executed" in capsys.readouterr().out

    def test_name_carried_as_field(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger("rowmap.binder").info("statement_executed")
        assert _last_record(capsys)["logger_name"] == "rowmap.binder"

    def test_unnamed_logger(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger().info("evt")
        assert "logger_name" not in _last_record(capsys)

    def test_module_logger_follows_later_configuration(self, capsys):
        logger = get_logger("rowmap.facade")
        configure_logging(level="INFO", json_format=True, service="billing")
        logger.info("entity_persisted", id=1)
        assert _last_record(capsys)["service.name"] == "billing"


class TestConfigureLogging:
    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_output(self, capsys):
        configure_logging(level="INFO", json_format=True, service="billing")
        get_logger("test").info("entity_persisted", table="user", id=1)

        record = _last_record(capsys)
        assert record["event"] == "entity_persisted"
        assert record["table"] == "user"
        assert record["service.name"] == "billing"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_debug_suppressed_at_info(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger("test").debug("statement_executed", sql="SELECT 1")
        assert capsys.readouterr().out == ""

    def test_level_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("ROWMAP_LOG_LEVEL", "warning")
        configure_logging(json_format=True)
        get_logger("test").info("entity_persisted")
        assert capsys.readouterr().out == ""

    def test_explicit_level_beats_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("ROWMAP_LOG_LEVEL", "ERROR")
        configure_logging(level="DEBUG", json_format=True)
        get_logger("test").debug("statement_executed")
        assert _last_record(capsys)["event"] == "statement_executed"

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            configure_logging(level="LOUD")

    def test_without_timestamp(self, capsys):
        configure_logging(level="DEBUG", json_format=True, add_timestamp=False)
        get_logger("test").debug("statement_executed")
        assert "timestamp" not in _last_record(capsys)

    def test_sql_compacted(self, capsys):
        configure_logging(level="DEBUG", json_format=True, max_sql_length=20)
        get_logger("test").debug("statement_executed", sql="CREATE TABLE user (\n    id INTEGER\n)")
        assert _last_record(capsys)["sql"] == "CREATE TABLE user ( ..."

    def test_console_output(self, capsys):
        configure_logging(level="INFO", json_format=False)
        get_logger("test").warning("columns_ignored", columns=["x"])
        assert "columns_ignored" in capsys.readouterr().out


class TestCompactSql:
    def test_flattens_whitespace(self):
        event = compact_sql()(None, "debug", {"sql": "SELECT *\n  FROM user\tWHERE id = ?"})
        assert event["sql"] == "SELECT * FROM user WHERE id = ?"

    def test_truncates(self):
        assert compact_sql(6)(None, "debug", {"sql": "SELECT 1"})["sql"] == "SELECT..."

    def test_ignores_events_without_sql(self):
        assert compact_sql()(None, "info", {"event": "x", "id": 3}) == {"event": "x", "id": 3}
