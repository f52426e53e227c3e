"""Materializing ingestion strategy.

This module loads an entire NDJSON source into a keyed snapshot.
Nothing is returned unless the whole pass succeeds.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from core.constants import ABORT_DECODE_POLICY
from core.types import DecodePolicy, Record
from ingest.line_reader import SourceLineReader
from ingest.memory_budget import MemoryBudget
from store.snapshot import DatasetSnapshot


def materialize_source(
    source_path: Path,
    key_field: str,
    memory_ceiling: int,
    decode_policy: DecodePolicy = ABORT_DECODE_POLICY,
) -> DatasetSnapshot:
    """Read a source into a keyed dataset and index.

    Records whose key field is absent or not a string are dropped and
    counted. A later record with the same key replaces the earlier one.

    Args:
        source_path: NDJSON file to load.
        key_field: Field whose string value keys each record.
        memory_ceiling: Maximum bytes this pass may read.
        decode_policy: Whether malformed lines abort or are skipped.

    Returns:
        Snapshot built from the full source.

    Raises:
        NdQuerySourceError: If the source cannot be read.
        NdQueryDecodeError: If a line is malformed under the abort policy.
        NdQueryMemoryLimitError: If the ceiling is crossed.
    """
    reader = SourceLineReader(source_path, MemoryBudget(memory_ceiling), decode_policy)
    records: dict[str, Record] = {}
    key_positions: dict[str, int] = {}
    accepted_count = 0
    dropped_count = 0
    for record in reader.records():
        key_value = _key_of(record, key_field)
        if key_value is None:
            dropped_count += 1
            continue
        accepted_count += 1
        records[key_value] = record
        key_positions[key_value] = accepted_count
    return DatasetSnapshot.build(
        source_path=source_path,
        key_field=key_field,
        records=records,
        key_positions=key_positions,
        dropped_count=dropped_count,
        skipped_line_count=reader.skipped_line_count,
        bytes_read=reader.bytes_read,
        loaded_at=datetime.now(timezone.utc),
    )


def _key_of(record: dict[str, Any], key_field: str) -> str | None:
    key_value = record.get(key_field)
    return key_value if isinstance(key_value, str) else None
