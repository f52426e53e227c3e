"""Record matching over condition lists.

This module applies ANDed filter conditions to decoded records.
It is shared by the materializing and streaming strategies.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Sequence

from core.types import FilterCondition, Record
from query.condition_evaluator import evaluate_condition


def matches(record: Record, conditions: Sequence[FilterCondition]) -> bool:
    """Return whether a record satisfies every condition.

    Args:
        record: Decoded record.
        conditions: Conditions combined by logical AND.

    Returns:
        ``True`` when all conditions pass; empty conditions match everything.
    """
    if not isinstance(record, Mapping):
        return False
    for condition in conditions:
        if condition.field not in record:
            return False
        if not evaluate_condition(
            record[condition.field],
            condition.operator,
            condition.value,
            condition.value_type,
        ):
            return False
    return True


def filter_records(
    records: Iterable[Record],
    conditions: Sequence[FilterCondition],
) -> list[Record]:
    """Collect records matching all conditions in encounter order.

    Args:
        records: Records to evaluate.
        conditions: Conditions combined by logical AND.

    Returns:
        Matching records.
    """
    return [record for record in records if matches(record, conditions)]
