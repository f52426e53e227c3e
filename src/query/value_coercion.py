"""Typed value coercion for filter evaluation.

This module classifies decoded JSON values by kind and converts them
into the typed domains declared by filter conditions.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable

from core.constants import DATE_LAYOUT, DATETIME_LAYOUT
from core.types import JsonKind


class ValueCoercionError(ValueError):
    """Raised when a value cannot be coerced into a declared type."""


def json_kind(value: Any) -> JsonKind:
    """Return the JSON kind tag of a decoded value.

    Args:
        value: Value produced by ``json.loads``.

    Returns:
        Kind tag used by coercers for dispatch.
    """
    # bool is an int subclass and must be tested first.
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    if isinstance(value, list):
        return "array"
    return "object"


def coerce_field_value(value: Any, value_type: str) -> Any:
    """Coerce a record field value into a declared type.

    Args:
        value: Decoded JSON field value.
        value_type: Declared condition type.

    Returns:
        Typed value ready for comparison.

    Raises:
        ValueCoercionError: If kind or format does not match.
    """
    coercer = _FIELD_COERCERS.get(value_type)
    if coercer is None:
        raise ValueCoercionError(f"unsupported value type '{value_type}'")
    return coercer(value)


def coerce_comparison_value(value: Any, value_type: str) -> Any:
    """Coerce a caller-supplied comparison value into a declared type.

    Integer comparison values must be Python ints and are widened to float,
    so integers beyond 2**53 may compare equal to their neighbours and
    integers beyond float range never match.

    Args:
        value: Condition comparison value.
        value_type: Declared condition type.

    Returns:
        Typed comparison value.

    Raises:
        ValueCoercionError: If value does not fit the declared type.
    """
    if value_type == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueCoercionError(f"expected int comparison value, got {value!r}")
        return _widen(value)
    if value_type == "date" and isinstance(value, date) and not isinstance(value, datetime):
        return value
    if value_type == "datetime" and isinstance(value, datetime):
        # Field values parse as naive datetimes.
        if value.tzinfo is not None:
            raise ValueCoercionError(f"expected naive datetime, got {value.isoformat()}")
        return value.replace(microsecond=0)
    return coerce_field_value(value, value_type)


def _coerce_number(value: Any) -> float:
    if json_kind(value) != "number":
        raise ValueCoercionError(f"expected number, got {json_kind(value)}")
    return _widen(value)


def _widen(value: int | float) -> float:
    try:
        return float(value)
    except OverflowError as error:
        raise ValueCoercionError(
            f"{value.bit_length()}-bit integer is outside float range"
        ) from error


def _coerce_string(value: Any) -> str:
    if json_kind(value) != "string":
        raise ValueCoercionError(f"expected string, got {json_kind(value)}")
    return value


def _coerce_boolean(value: Any) -> bool:
    if json_kind(value) != "boolean":
        raise ValueCoercionError(f"expected boolean, got {json_kind(value)}")
    return value


def _coerce_date(value: Any) -> date:
    return _parse_layout(value, DATE_LAYOUT).date()


def _coerce_datetime(value: Any) -> datetime:
    return _parse_layout(value, DATETIME_LAYOUT)


def _parse_layout(value: Any, layout: str) -> datetime:
    text = _coerce_string(value)
    try:
        return datetime.strptime(text, layout)
    except ValueError as error:
        raise ValueCoercionError(f"'{text}' does not match layout '{layout}'") from error


_FIELD_COERCERS: dict[str, Callable[[Any], Any]] = {
    "int": _coerce_number,
    "string": _coerce_string,
    "bool": _coerce_boolean,
    "date": _coerce_date,
    "datetime": _coerce_datetime,
}
