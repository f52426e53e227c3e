"""Per-type condition evaluation.

This module compares one field value against one typed condition.
Every type or format problem resolves to ``False`` instead of raising.
"""

from __future__ import annotations

import operator as _operator
from typing import Any, Callable

from query.value_coercion import (
    ValueCoercionError,
    coerce_comparison_value,
    coerce_field_value,
)

_Comparator = Callable[[Any, Any], bool]

_ORDERING: dict[str, _Comparator] = {
    ">": _operator.gt,
    ">=": _operator.ge,
    "<": _operator.lt,
    "<=": _operator.le,
    "==": _operator.eq,
}

_OPERATOR_TABLE: dict[str, dict[str, _Comparator]] = {
    "int": _ORDERING,
    "string": {
        "==": _operator.eq,
        "contains": lambda field_value, needle: needle in field_value,
    },
    "date": _ORDERING,
    "datetime": _ORDERING,
    "bool": {"==": _operator.eq},
}


def supported_operators(value_type: str) -> tuple[str, ...]:
    """Return operators accepted for a declared type.

    Args:
        value_type: Declared condition type.

    Returns:
        Operator names, empty for unknown types.
    """
    return tuple(_OPERATOR_TABLE.get(value_type, {}))


def evaluate_condition(
    field_value: Any,
    operator: str,
    comparison_value: Any,
    value_type: str,
) -> bool:
    """Evaluate one typed comparison.

    Args:
        field_value: Decoded JSON value taken from the record.
        operator: Comparison operator.
        comparison_value: Condition value to compare against.
        value_type: Declared type for both sides.

    Returns:
        Whether the field value satisfies the condition.
    """
    comparator = _OPERATOR_TABLE.get(value_type, {}).get(operator)
    if comparator is None:
        return False
    try:
        typed_field = coerce_field_value(field_value, value_type)
        typed_comparison = coerce_comparison_value(comparison_value, value_type)
    except ValueCoercionError:
        return False
    return bool(comparator(typed_field, typed_comparison))
