"""Mode-aware dataset manager.

This module owns the storage mode, memory ceiling, and current snapshot.
It dispatches loads to the matching strategy and guards reads with a lock.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from core.config import NdQueryConfig, parse_decode_policy, parse_storage_mode
from core.constants import (
    DEFAULT_DECODE_POLICY,
    DEFAULT_MEMORY_CEILING_BYTES,
    IN_MEMORY_MODE,
    SPLIT_MODE,
)
from core.errors import NdQueryConfigError, NdQueryError, NdQueryModeError
from core.logging_config import get_logger
from core.types import DecodePolicy, FilterCondition, LoadSummary, Record, StorageMode
from ingest.materializing import materialize_source
from ingest.streaming import stream_filter
from query.record_matcher import filter_records
from store.rw_lock import ReadWriteLock
from store.snapshot import DatasetSnapshot

_LOGGER = get_logger(__name__)


class DataManager:
    """Entry point for loading and querying an NDJSON source.

    In ``in_memory`` mode the manager keeps one immutable snapshot that
    reloads replace wholesale. In ``split`` mode it keeps nothing and
    each call scans the source. The mode never changes after construction.
    """

    def __init__(
        self,
        mode: StorageMode | str,
        memory_ceiling: int = DEFAULT_MEMORY_CEILING_BYTES,
        decode_policy: DecodePolicy | str = DEFAULT_DECODE_POLICY,
    ) -> None:
        """Create a manager.

        Args:
            mode: Storage mode, ``in_memory`` or ``split``.
            memory_ceiling: Maximum bytes a single pass may read.
            decode_policy: Whether malformed lines abort or are skipped.

        Raises:
            NdQueryConfigError: If any argument is invalid.
        """
        if isinstance(memory_ceiling, bool) or not isinstance(memory_ceiling, int):
            raise NdQueryConfigError(
                f"Invalid memory ceiling {memory_ceiling!r}: expected integer bytes."
            )
        if memory_ceiling <= 0:
            raise NdQueryConfigError(
                f"Invalid memory ceiling {memory_ceiling}: must be positive."
            )
        self._mode = parse_storage_mode(mode)
        self._memory_ceiling = memory_ceiling
        self._decode_policy = parse_decode_policy(decode_policy)
        self._lock = ReadWriteLock()
        self._snapshot: DatasetSnapshot | None = None

    @classmethod
    def from_config(cls, config: NdQueryConfig) -> "DataManager":
        """Create a manager from runtime configuration."""
        return cls(config.mode, config.memory_ceiling, config.decode_policy)

    @property
    def mode(self) -> StorageMode:
        return self._mode

    @property
    def memory_ceiling(self) -> int:
        return self._memory_ceiling

    def load(self, source_path: str | Path, key_field: str) -> LoadSummary:
        """Load a source into memory and replace the current snapshot.

        The snapshot is built without holding the lock. Only the final swap
        is exclusive, and a failed load leaves the prior snapshot in place.

        Args:
            source_path: NDJSON file to load.
            key_field: Field whose string value keys each record.

        Returns:
            Statistics of the installed snapshot.

        Raises:
            NdQueryModeError: If the manager is not in ``in_memory`` mode.
            NdQuerySourceError: If the source cannot be read.
            NdQueryDecodeError: If a line is malformed under the abort policy.
            NdQueryMemoryLimitError: If the ceiling is crossed.
        """
        self._require_mode(IN_MEMORY_MODE, "load")
        path = Path(source_path)
        try:
            snapshot = materialize_source(
                path, key_field, self._memory_ceiling, self._decode_policy
            )
        except NdQueryError as error:
            _LOGGER.error(
                "dataset_load_failed",
                source_path=str(path),
                key_field=key_field,
                error_type=type(error).__name__,
                error=str(error),
            )
            raise
        with self._lock.write_lock():
            self._snapshot = snapshot
        summary = snapshot.summary()
        _LOGGER.info(
            "dataset_loaded",
            source_path=str(path),
            key_field=key_field,
            record_count=summary.record_count,
            dropped_count=summary.dropped_count,
            skipped_line_count=summary.skipped_line_count,
            bytes_read=summary.bytes_read,
        )
        return summary

    def load_and_filter(
        self,
        source_path: str | Path,
        conditions: Sequence[FilterCondition],
    ) -> list[Record]:
        """Scan a source and return records matching every condition.

        Args:
            source_path: NDJSON file to scan.
            conditions: Conditions combined by logical AND.

        Returns:
            Matching records in encounter order.

        Raises:
            NdQueryModeError: If the manager is not in ``split`` mode.
            NdQuerySourceError: If the source cannot be read.
            NdQueryDecodeError: If a line is malformed under the abort policy.
            NdQueryMemoryLimitError: If the ceiling is crossed.
        """
        self._require_mode(SPLIT_MODE, "load_and_filter")
        path = Path(source_path)
        try:
            return stream_filter(path, conditions, self._memory_ceiling, self._decode_policy)
        except NdQueryError as error:
            _LOGGER.error(
                "stream_filter_failed",
                source_path=str(path),
                condition_count=len(conditions),
                error_type=type(error).__name__,
                error=str(error),
            )
            raise

    def get_by_key(self, key: str) -> Record | None:
        """Look up one record by its key value.

        Args:
            key: Key field value.

        Returns:
            Matching record, or ``None`` when absent or nothing is loaded.

        Raises:
            NdQueryModeError: If the manager is not in ``in_memory`` mode.
        """
        self._require_mode(IN_MEMORY_MODE, "get_by_key")
        with self._lock.read_lock():
            if self._snapshot is None:
                return None
            return self._snapshot.records.get(key)

    def filter(self, conditions: Sequence[FilterCondition]) -> list[Record]:
        """Return loaded records matching every condition.

        Result order is unspecified; sort explicitly when it matters.

        Args:
            conditions: Conditions combined by logical AND.

        Returns:
            Matching records; empty when nothing is loaded.

        Raises:
            NdQueryModeError: If the manager is not in ``in_memory`` mode.
        """
        self._require_mode(IN_MEMORY_MODE, "filter")
        with self._lock.read_lock():
            if self._snapshot is None:
                return []
            return filter_records(self._snapshot.records.values(), conditions)

    def snapshot_info(self) -> LoadSummary | None:
        """Return statistics for the committed snapshot, if any.

        Raises:
            NdQueryModeError: If the manager is not in ``in_memory`` mode.
        """
        self._require_mode(IN_MEMORY_MODE, "snapshot_info")
        with self._lock.read_lock():
            return None if self._snapshot is None else self._snapshot.summary()

    def _require_mode(self, expected_mode: str, operation: str) -> None:
        if self._mode != expected_mode:
            raise NdQueryModeError(
                f"Operation '{operation}' requires {expected_mode} mode, "
                f"but this manager runs in {self._mode} mode. "
                "Create a manager with the matching mode."
            )
