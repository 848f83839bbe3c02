"""Tests for ``rowmap.dialect``."""

from __future__ import annotations

import pytest

from rowmap.dialect import Dialect, MySQLDialect, SQLiteDialect, get_dialect


class TestSQLiteDialect:
    def test_omits_sentinel_id(self):
        assert SQLiteDialect().binds_sentinel_id is False

    def test_translate_is_identity(self):
        sql = "SELECT * FROM user WHERE id = ? OR name = :name"
        assert SQLiteDialect().translate(sql) == sql

    def test_last_insert_id_sql(self):
        assert SQLiteDialect().last_insert_id_sql() == "SELECT last_insert_rowid()"


class TestMySQLDialect:
    def test_binds_sentinel_id(self):
        assert MySQLDialect().binds_sentinel_id is True

    def test_positional(self):
        assert MySQLDialect().translate("UPDATE user SET id = ?,name = ? WHERE id = 5") == (
            "UPDATE user SET id = %s,name = %s WHERE id = 5"
        )

    def test_named(self):
        assert MySQLDialect().translate("SELECT * FROM user WHERE name = :name") == (
            "SELECT * FROM user WHERE name = %(name)s"
        )

    def test_literals_untouched(self):
        sql = "SELECT * FROM user WHERE note = 'why? :because' AND id = ?"
        assert MySQLDialect().translate(sql) == (
            "SELECT * FROM user WHERE note = 'why? :because' AND id = %s"
        )

    def test_escaped_quote_in_literal(self):
        sql = "SELECT 'it''s ?' , ?"
        assert MySQLDialect().translate(sql) == "SELECT 'it''s ?' , %s"

    def test_double_colon_not_a_parameter(self):
        assert MySQLDialect().translate("SELECT a::text") == "SELECT a::text"

    def test_last_insert_id_sql(self):
        assert MySQLDialect().last_insert_id_sql() == "SELECT LAST_INSERT_ID()"


class TestGetDialect:
    @pytest.mark.parametrize("name", ["sqlite", "mysql", "MariaDB"])
    def test_known(self, name):
        assert isinstance(get_dialect(name), Dialect)

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_dialect("oracle")
