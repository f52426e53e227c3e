"""Unit tests for shared typed models."""

from __future__ import annotations

import pytest

from core.errors import NdQueryConditionError
from core.types import FilterCondition


def test_from_dict_builds_condition() -> None:
    """Condition mappings should map ``type`` onto ``value_type``."""
    condition = FilterCondition.from_dict(
        {"field": "age", "type": "int", "operator": ">", "value": 30}
    )

    assert condition == FilterCondition("age", "int", ">", 30)
    assert condition.to_dict()["type"] == "int"


def test_from_dict_raises_for_missing_keys() -> None:
    """Condition mappings must name every key."""
    with pytest.raises(NdQueryConditionError, match="value"):
        FilterCondition.from_dict({"field": "age", "type": "int", "operator": ">"})


def test_from_dict_raises_for_non_string_field() -> None:
    """Field, type, and operator must be non-empty strings."""
    with pytest.raises(NdQueryConditionError):
        FilterCondition.from_dict({"field": 7, "type": "int", "operator": ">", "value": 1})


def test_from_dict_keeps_unknown_type_for_evaluation() -> None:
    """Unknown types are structural-valid and fail closed at evaluation."""
    condition = FilterCondition.from_dict(
        {"field": "age", "type": "decimal", "operator": ">", "value": 1}
    )

    assert condition.value_type == "decimal"
