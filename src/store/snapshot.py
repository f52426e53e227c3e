"""Immutable dataset snapshot.

This module defines the unit that a materializing load publishes.
Dataset and index travel together so they are always swapped as one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from core.types import LoadSummary, Record


@dataclass(frozen=True)
class DatasetSnapshot:
    """Keyed records plus their positional index.

    Attributes:
        source_path: File the snapshot was loaded from.
        key_field: Field the records are keyed by.
        records: Read-only mapping of key value to record.
        index: Read-only mapping of key field to key value ordinals.
        dropped_count: Records excluded for a missing or non-string key.
        skipped_line_count: Malformed lines skipped under the skip policy.
        bytes_read: Bytes charged while loading.
        loaded_at: UTC time the snapshot was built.
    """

    source_path: Path
    key_field: str
    records: Mapping[str, Record]
    index: Mapping[str, Mapping[str, int]]
    dropped_count: int
    skipped_line_count: int
    bytes_read: int
    loaded_at: datetime

    @classmethod
    def build(
        cls,
        source_path: Path,
        key_field: str,
        records: dict[str, Record],
        key_positions: dict[str, int],
        dropped_count: int,
        skipped_line_count: int,
        bytes_read: int,
        loaded_at: datetime,
    ) -> "DatasetSnapshot":
        """Freeze temporary load structures into a snapshot.

        Args:
            source_path: File the records came from.
            key_field: Field the records are keyed by.
            records: Temporary keyed records; ownership moves to the snapshot.
            key_positions: Temporary key value to ordinal mapping.
            dropped_count: Records dropped during the load.
            skipped_line_count: Lines skipped during the load.
            bytes_read: Bytes charged during the load.
            loaded_at: Build timestamp.

        Returns:
            Snapshot exposing read-only views.
        """
        index = {key_field: MappingProxyType(key_positions)} if key_positions else {}
        return cls(
            source_path=source_path,
            key_field=key_field,
            records=MappingProxyType(records),
            index=MappingProxyType(index),
            dropped_count=dropped_count,
            skipped_line_count=skipped_line_count,
            bytes_read=bytes_read,
            loaded_at=loaded_at,
        )

    def summary(self) -> LoadSummary:
        """Return load statistics for this snapshot."""
        return LoadSummary(
            key_field=self.key_field,
            record_count=len(self.records),
            dropped_count=self.dropped_count,
            skipped_line_count=self.skipped_line_count,
            bytes_read=self.bytes_read,
        )
