"""Unit tests for typed value coercion."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from query.value_coercion import (
    ValueCoercionError,
    coerce_comparison_value,
    coerce_field_value,
    json_kind,
)


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (True, "boolean"),
        (3, "number"),
        (3.5, "number"),
        ("x", "string"),
        (None, "null"),
        ([1], "array"),
        ({"a": 1}, "object"),
    ],
)
def test_json_kind_tags_decoded_values(value: object, kind: str) -> None:
    """Every decoded JSON shape should map to exactly one kind tag."""
    assert json_kind(value) == kind


def test_int_field_widens_to_float() -> None:
    """Integer fields compare as floats after widening."""
    assert coerce_field_value(25, "int") == 25.0
    assert isinstance(coerce_field_value(25, "int"), float)


def test_int_field_rejects_boolean() -> None:
    """JSON booleans are not numbers even though bool subclasses int."""
    with pytest.raises(ValueCoercionError):
        coerce_field_value(True, "int")


def test_int_comparison_value_must_be_int() -> None:
    """Integer comparison values must be ints, not floats or strings."""
    assert coerce_comparison_value(30, "int") == 30.0
    for bad_value in (30.5, "30", False):
        with pytest.raises(ValueCoercionError):
            coerce_comparison_value(bad_value, "int")


def test_date_field_parses_fixed_layout() -> None:
    """Date fields use the YYYY-MM-DD layout."""
    assert coerce_field_value("2024-02-15", "date") == date(2024, 2, 15)
    with pytest.raises(ValueCoercionError):
        coerce_field_value("15/02/2024", "date")


def test_datetime_field_rejects_date_only_string() -> None:
    """Datetime fields require the full YYYY-MM-DD HH:MM:SS layout."""
    assert coerce_field_value("2024-02-15 10:00:00", "datetime") == datetime(2024, 2, 15, 10)
    with pytest.raises(ValueCoercionError):
        coerce_field_value("2024-02-15", "datetime")


def test_comparison_value_accepts_native_dates() -> None:
    """Callers may pass date and datetime objects as comparison values."""
    assert coerce_comparison_value(date(2024, 1, 1), "date") == date(2024, 1, 1)
    assert coerce_comparison_value(
        datetime(2024, 1, 1, 0, 0, 0, 999), "datetime"
    ) == datetime(2024, 1, 1)


def test_unknown_type_raises_coercion_error() -> None:
    """Unsupported declared types are coercion failures."""
    with pytest.raises(ValueCoercionError):
        coerce_field_value(1, "decimal")
