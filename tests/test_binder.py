"""Tests for ``rowmap.binder``: criteria classification and binding."""

from __future__ import annotations

from decimal import Decimal

import pytest

from rowmap.binder import ParameterBinder, coerce, is_positional
from rowmap.errors import BindError, ExecutionError
from rowmap.protocols import ParamType
from tests._support import RecordingStatement


@pytest.fixture
def binder() -> ParameterBinder:
    return ParameterBinder()


class TestIsPositional:
    def test_list_is_positional(self):
        assert is_positional([1, "a", None]) is True

    def test_tuple_is_positional(self):
        assert is_positional((1,)) is True

    def test_dense_int_keys_are_positional(self):
        assert is_positional({0: "a", 1: "b", 2: "c"}) is True

    def test_key_order_does_not_matter(self):
        assert is_positional({1: "b", 0: "a"}) is True

    def test_one_based_keys_are_named(self):
        assert is_positional({1: "a", 2: "b"}) is False

    def test_gap_is_named(self):
        assert is_positional({0: "a", 2: "b"}) is False

    def test_string_keys_are_named(self):
        assert is_positional({"id": 5}) is False

    def test_mixed_keys_are_named(self):
        assert is_positional({0: "a", "name": "b"}) is False

    def test_bool_keys_are_named(self):
        assert is_positional({False: "a", True: "b"}) is False


class TestCoerce:
    def test_text(self):
        assert coerce("Bob") == ("Bob", ParamType.STR)

    def test_numeric_text_stays_text(self):
        assert coerce("42") == ("42", ParamType.STR)

    def test_int(self):
        assert coerce(7) == (7, ParamType.INT)

    def test_float_truncated(self):
        assert coerce(2.9) == (2, ParamType.INT)

    def test_decimal(self):
        assert coerce(Decimal("5.5")) == (5, ParamType.INT)

    def test_bool(self):
        assert coerce(True) == (1, ParamType.INT)

    def test_none(self):
        assert coerce(None) == (None, ParamType.NULL)

    def test_unsupported(self):
        with pytest.raises(TypeError):
            coerce(object())


class TestBindAndExecute:
    def test_positional_keys_shifted(self, binder):
        statement = RecordingStatement("SELECT * FROM user WHERE id = ? AND name = ?")
        result = binder.bind_and_execute(statement, [5, "Bob"])

        assert result.is_ok()
        assert result.unwrap() is statement
        assert statement.bound == {1: (5, ParamType.INT), 2: ("Bob", ParamType.STR)}

    def test_named_keys_verbatim(self, binder):
        statement = RecordingStatement("SELECT * FROM user WHERE id = :id")
        binder.bind_and_execute(statement, {"id": 3, ":name": "x"})
        assert statement.bound == {"id": (3, ParamType.INT), ":name": ("x", ParamType.STR)}

    def test_one_based_dict_bound_verbatim(self, binder):
        statement = RecordingStatement()
        binder.bind_and_execute(statement, {1: "a", 2: "b"})
        assert set(statement.bound) == {1, 2}

    def test_empty_criteria_executes(self, binder):
        statement = RecordingStatement()
        assert binder.bind_and_execute(statement).is_ok()
        assert statement.executed is True
        assert statement.bound == {}

    def test_execution_failure_is_err(self, binder):
        statement = RecordingStatement("SELEC nonsense", succeed=False)
        result = binder.bind_and_execute(statement, [1])

        assert result.is_err()
        error = result.error
        assert isinstance(error, ExecutionError)
        assert error.sql == "SELEC nonsense"
        assert "Params:  1" in error.params_dump
        assert error.trace
        assert isinstance(error.cause, RuntimeError)

    def test_unwrap_raises_execution_error(self, binder):
        statement = RecordingStatement(succeed=False)
        with pytest.raises(ExecutionError):
            binder.bind_and_execute(statement).unwrap()

    def test_unbindable_value_is_bind_error(self, binder):
        statement = RecordingStatement()
        result = binder.bind_and_execute(statement, [object()])

        assert result.is_err()
        assert isinstance(result.error, BindError)
        assert statement.executed is False
