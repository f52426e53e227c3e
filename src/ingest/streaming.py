"""Streaming ingestion strategy.

This module filters an NDJSON source record by record.
Only matching records are retained; no dataset or index is built.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from core.constants import ABORT_DECODE_POLICY
from core.logging_config import get_logger
from core.types import DecodePolicy, FilterCondition, Record
from ingest.line_reader import SourceLineReader
from ingest.memory_budget import MemoryBudget
from query.record_matcher import matches

_LOGGER = get_logger(__name__)


def stream_filter(
    source_path: Path,
    conditions: Sequence[FilterCondition],
    memory_ceiling: int,
    decode_policy: DecodePolicy = ABORT_DECODE_POLICY,
) -> list[Record]:
    """Scan a source and keep records matching every condition.

    Args:
        source_path: NDJSON file to scan.
        conditions: Conditions combined by logical AND.
        memory_ceiling: Maximum bytes this pass may read.
        decode_policy: Whether malformed lines abort or are skipped.

    Returns:
        Matching records in encounter order.

    Raises:
        NdQuerySourceError: If the source cannot be read.
        NdQueryDecodeError: If a line is malformed under the abort policy.
        NdQueryMemoryLimitError: If the ceiling is crossed.
    """
    reader = SourceLineReader(source_path, MemoryBudget(memory_ceiling), decode_policy)
    matched: list[Record] = []
    scanned_count = 0
    for record in reader.records():
        scanned_count += 1
        if matches(record, conditions):
            matched.append(record)
    _LOGGER.info(
        "stream_filter_completed",
        source_path=str(source_path),
        scanned_count=scanned_count,
        matched_count=len(matched),
        skipped_line_count=reader.skipped_line_count,
        bytes_read=reader.bytes_read,
    )
    return matched
