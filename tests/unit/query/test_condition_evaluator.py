"""Unit tests for per-type condition evaluation."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from query.condition_evaluator import evaluate_condition, supported_operators


@pytest.mark.parametrize(
    ("operator", "expected"),
    [(">", True), (">=", True), ("<", False), ("<=", False), ("==", False)],
)
def test_int_ordering_operators(operator: str, expected: bool) -> None:
    """Integer comparisons follow numeric ordering."""
    assert evaluate_condition(35, operator, 30, "int") is expected


def test_int_equality_against_float_field() -> None:
    """Integer-like floats equal their widened comparison value."""
    assert evaluate_condition(30.0, "==", 30, "int") is True


def test_string_equality_and_contains() -> None:
    """Strings support exact and substring matching."""
    assert evaluate_condition("James Smith", "contains", "James", "string") is True
    assert evaluate_condition("Alice", "contains", "James", "string") is False
    assert evaluate_condition("James", "==", "James", "string") is True


def test_bool_requires_real_boolean() -> None:
    """A string "true" never matches a boolean condition."""
    assert evaluate_condition(True, "==", True, "bool") is True
    assert evaluate_condition("true", "==", True, "bool") is False


def test_datetime_scenario() -> None:
    """Datetime conditions compare at second granularity and fail closed."""
    assert evaluate_condition("2024-02-15 10:00:00", ">", "2024-01-01 00:00:00", "datetime")
    assert not evaluate_condition("2024-02-15", ">", "2024-01-01 00:00:00", "datetime")


def test_aware_datetime_comparison_fails_closed() -> None:
    """Timezone-aware comparison values cannot match naive field values."""
    aware = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert evaluate_condition("2024-02-15 10:00:00", ">", aware, "datetime") is False


def test_date_ordering() -> None:
    """Date conditions compare at day granularity."""
    assert evaluate_condition("2024-01-15", ">=", "2024-01-15", "date") is True
    assert evaluate_condition("2024-01-14", ">=", "2024-01-15", "date") is False


@pytest.mark.parametrize(
    ("value_type", "operator"),
    [("string", ">"), ("bool", "<"), ("int", "contains"), ("date", "!="), ("decimal", "==")],
)
def test_unsupported_operator_or_type_is_false(value_type: str, operator: str) -> None:
    """Operators outside the type table resolve to no match."""
    assert evaluate_condition("2024-01-01", operator, "2024-01-01", value_type) is False


@pytest.mark.parametrize(
    ("field_value", "comparison", "value_type"),
    [
        (None, 1, "int"),
        ([1, 2], 1, "int"),
        ({"a": 1}, "a", "string"),
        ("abc", 1, "int"),
        (5, "5", "string"),
        ("2024-13-40", "2024-01-01", "date"),
        ("2024-01-01", "not a date", "date"),
        (1, True, "bool"),
    ],
)
def test_mismatched_values_never_raise(
    field_value: object,
    comparison: object,
    value_type: str,
) -> None:
    """Wrong kinds and unparseable strings evaluate to False."""
    assert evaluate_condition(field_value, "==", comparison, value_type) is False


def test_supported_operators_table() -> None:
    """Operator table should expose type-specific operators."""
    assert supported_operators("string") == ("==", "contains")
    assert supported_operators("bool") == ("==",)
    assert supported_operators("unknown") == ()


@pytest.mark.parametrize(
    ("field_value", "operator", "comparison"),
    [(10**400, ">", 30), (5, "<", 10**400), (10**400, "==", 10**400)],
)
def test_integers_beyond_float_range_fail_closed(
    field_value: int,
    operator: str,
    comparison: int,
) -> None:
    """Integers too large to widen evaluate to False instead of overflowing."""
    assert evaluate_condition(field_value, operator, comparison, "int") is False
