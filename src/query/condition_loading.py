"""Structured condition inputs.

This module builds filter conditions from JSON files and CLI tuples.
It validates structure only; type mismatches are left to evaluation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.constants import SOURCE_ENCODING, SUPPORTED_VALUE_TYPES
from core.errors import NdQueryConditionError
from core.types import FilterCondition

_BOOL_LITERALS = {"true": True, "false": False}


def load_conditions_file(path: Path) -> list[FilterCondition]:
    """Read a JSON array of condition objects.

    Args:
        path: Path to a JSON file.

    Returns:
        Parsed conditions in file order.

    Raises:
        NdQueryConditionError: If the file is unreadable or malformed.
    """
    try:
        payload = json.loads(path.read_text(encoding=SOURCE_ENCODING))
    except OSError as error:
        raise NdQueryConditionError(
            f"Failed to read conditions file {path}: {error.strerror}. "
            "Provide a readable JSON file."
        ) from error
    except json.JSONDecodeError as error:
        raise NdQueryConditionError(
            f"Failed to parse conditions file {path}:{error.lineno}: {error.msg}. "
            "Fix the JSON syntax and retry."
        ) from error
    if not isinstance(payload, list):
        raise NdQueryConditionError(
            f"Invalid conditions file {path}: expected a JSON array of condition objects."
        )
    return [FilterCondition.from_dict(item) for item in payload]


def build_condition(field: str, value_type: str, operator: str, raw_value: str) -> FilterCondition:
    """Build a condition from command-line text values.

    Args:
        field: Record field name.
        value_type: Declared type name.
        operator: Comparison operator.
        raw_value: Comparison value as typed on the command line.

    Returns:
        Condition with the value converted for its declared type.

    Raises:
        NdQueryConditionError: If the type is unknown or the value invalid.
    """
    if value_type not in SUPPORTED_VALUE_TYPES:
        raise NdQueryConditionError(
            f"Unsupported condition type '{value_type}' for field '{field}'. "
            f"Use one of: {', '.join(SUPPORTED_VALUE_TYPES)}."
        )
    return FilterCondition(
        field=field,
        value_type=value_type,
        operator=operator,
        value=_convert_raw_value(field, value_type, raw_value),
    )


def _convert_raw_value(field: str, value_type: str, raw_value: str) -> Any:
    if value_type == "int":
        try:
            return int(raw_value)
        except ValueError as error:
            raise NdQueryConditionError(
                f"Invalid int value '{raw_value}' for field '{field}'."
            ) from error
    if value_type == "bool":
        lowered = raw_value.lower()
        if lowered not in _BOOL_LITERALS:
            raise NdQueryConditionError(
                f"Invalid bool value '{raw_value}' for field '{field}': use true or false."
            )
        return _BOOL_LITERALS[lowered]
    return raw_value
