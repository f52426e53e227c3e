"""Shared typed models.

This module defines immutable data models used by ingest, query,
and store layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

from core.errors import NdQueryConditionError

StorageMode = Literal["in_memory", "split"]
DecodePolicy = Literal["abort", "skip"]
JsonKind = Literal["number", "string", "boolean", "object", "array", "null"]

Record = Mapping[str, Any]

_CONDITION_KEYS = ("field", "type", "operator", "value")


@dataclass(frozen=True)
class FilterCondition:
    """One typed predicate over a record field.

    Attributes:
        field: Record field name, e.g. ``age``.
        value_type: Declared type used to coerce both sides.
        operator: Comparison operator, e.g. ``>`` or ``contains``.
        value: Comparison value, e.g. ``30`` or ``"2024-01-01"``.
    """

    field: str
    value_type: str
    operator: str
    value: Any

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FilterCondition":
        """Build a condition from a JSON-style mapping.

        Args:
            payload: Mapping with ``field``, ``type``, ``operator``, ``value``.

        Returns:
            Parsed filter condition.

        Raises:
            NdQueryConditionError: If keys are missing or mistyped.
        """
        if not isinstance(payload, Mapping):
            raise NdQueryConditionError(
                f"Invalid condition {payload!r}: expected an object with keys "
                f"{', '.join(_CONDITION_KEYS)}."
            )
        missing = [key for key in _CONDITION_KEYS if key not in payload]
        if missing:
            raise NdQueryConditionError(
                f"Invalid condition {dict(payload)!r}: missing {', '.join(missing)}. "
                "Provide every condition key and retry."
            )
        for key in ("field", "type", "operator"):
            if not isinstance(payload[key], str) or not payload[key]:
                raise NdQueryConditionError(
                    f"Invalid condition {dict(payload)!r}: '{key}' must be a non-empty string."
                )
        return cls(
            field=payload["field"],
            value_type=payload["type"],
            operator=payload["operator"],
            value=payload["value"],
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the condition into its JSON-style mapping."""
        return {
            "field": self.field,
            "type": self.value_type,
            "operator": self.operator,
            "value": self.value,
        }


@dataclass(frozen=True)
class LoadSummary:
    """Statistics reported by a materializing load.

    Attributes:
        key_field: Field the dataset is keyed by.
        record_count: Records installed in the dataset.
        dropped_count: Records excluded for a missing or non-string key.
        skipped_line_count: Malformed lines skipped under the skip policy.
        bytes_read: Bytes charged against the memory ceiling.
    """

    key_field: str
    record_count: int
    dropped_count: int
    skipped_line_count: int
    bytes_read: int
