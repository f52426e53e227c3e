"""Unit tests for record matching."""

from __future__ import annotations

import json
from itertools import permutations

from core.types import FilterCondition
from query.record_matcher import filter_records, matches

_RECORDS = [
    {"username": "user1", "age": 25, "fullname": "James Brown"},
    {"username": "user2", "age": 35, "fullname": "Alice Jameson"},
    {"username": "user3", "age": 40, "fullname": "James Smith"},
]
_CONDITIONS = [
    FilterCondition("age", "int", ">", 30),
    FilterCondition("fullname", "string", "contains", "James"),
]


def test_filter_records_age_and_fullname_scenario() -> None:
    """Users over 30 whose name contains James should match."""
    matched = filter_records(_RECORDS, _CONDITIONS)

    assert [record["username"] for record in matched] == ["user2", "user3"]


def test_missing_field_fails_match() -> None:
    """A condition on an absent field rejects the record."""
    record = {"username": "user4", "fullname": "James Doe"}

    assert matches(record, _CONDITIONS) is False


def test_empty_conditions_match_everything() -> None:
    """An empty AND is vacuously true."""
    assert filter_records(_RECORDS, []) == _RECORDS


def test_non_mapping_record_never_matches() -> None:
    """Only mapping records can satisfy conditions."""
    assert matches(["age", 40], []) is False  # type: ignore[arg-type]


def test_match_result_is_order_independent() -> None:
    """Reordering conditions should not change any match decision."""
    conditions = _CONDITIONS + [
        FilterCondition("username", "string", "==", "user3"),
        FilterCondition("age", "int", "<=", 40),
    ]
    for record in _RECORDS + [{"age": 50}]:
        results = {matches(record, list(order)) for order in permutations(conditions)}

        assert len(results) == 1


def test_matching_stops_at_first_failure() -> None:
    """Later conditions are not evaluated after a failure."""
    record = _TrackedRecord(age=10)
    conditions = [FilterCondition("age", "int", ">", 30), FilterCondition("missing", "int", ">", 1)]

    assert matches(record, conditions) is False
    assert record.looked_up == ["age"]


class _TrackedRecord(dict):
    """Dict that remembers which fields were looked up."""

    def __init__(self, **fields: object) -> None:
        super().__init__(**fields)
        self.looked_up: list[str] = []

    def __contains__(self, key: object) -> bool:
        self.looked_up.append(str(key))
        return super().__contains__(key)


def test_huge_decoded_integer_does_not_match() -> None:
    """A decoded integer beyond float range rejects the record."""
    record = json.loads('{"age": 1' + "0" * 400 + "}")

    assert matches(record, [FilterCondition("age", "int", ">", 30)]) is False
