"""Newline-delimited JSON source reader.

This module decodes one JSON object per line while charging a memory budget.
Both ingestion strategies consume records through this reader.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, BinaryIO, Iterator

from core.constants import ABORT_DECODE_POLICY, SOURCE_ENCODING
from core.errors import NdQueryDecodeError, NdQuerySourceError
from core.logging_config import get_logger
from core.types import DecodePolicy
from ingest.memory_budget import MemoryBudget

_LOGGER = get_logger(__name__)


class SourceLineReader:
    """Single-pass reader over an NDJSON source file.

    Lines are charged against the budget before decoding, and a line is read
    at most one byte past the remaining budget, so an oversized source fails
    without being pulled into memory.
    """

    def __init__(
        self,
        source_path: Path,
        budget: MemoryBudget,
        decode_policy: DecodePolicy = ABORT_DECODE_POLICY,
    ) -> None:
        self._source_path = source_path
        self._budget = budget
        self._decode_policy = decode_policy
        self._line_count = 0
        self._skipped_line_count = 0

    @property
    def line_count(self) -> int:
        return self._line_count

    @property
    def skipped_line_count(self) -> int:
        return self._skipped_line_count

    @property
    def bytes_read(self) -> int:
        return self._budget.consumed_bytes

    def records(self) -> Iterator[dict[str, Any]]:
        """Yield decoded records in file order.

        Yields:
            One decoded JSON object per non-blank line.

        Raises:
            NdQuerySourceError: If the file cannot be opened or read.
            NdQueryDecodeError: If a line is malformed under the abort policy.
            NdQueryMemoryLimitError: If the budget ceiling is crossed.
        """
        try:
            handle = self._source_path.open("rb")
        except OSError as error:
            raise NdQuerySourceError(
                f"Failed to open source {self._source_path}: {error.strerror or error}. "
                "Provide an existing readable NDJSON file."
            ) from error
        with handle:
            while True:
                raw_line = self._read_line(handle)
                if not raw_line:
                    return
                self._budget.charge(len(raw_line))
                self._line_count += 1
                record = self._decode_line(raw_line)
                if record is not None:
                    yield record

    def _read_line(self, handle: BinaryIO) -> bytes:
        try:
            return handle.readline(self._budget.remaining_bytes + 1)
        except OSError as error:
            raise NdQuerySourceError(
                f"Failed to read source {self._source_path} after line "
                f"{self._line_count}: {error.strerror or error}."
            ) from error

    def _decode_line(self, raw_line: bytes) -> dict[str, Any] | None:
        """Decode one raw line.

        Returns:
            Parsed object, or ``None`` for blank and skipped lines.
        """
        location = f"{self._source_path}:{self._line_count}"
        try:
            text = raw_line.decode(SOURCE_ENCODING)
        except UnicodeDecodeError as error:
            return self._reject_line(location, f"invalid UTF-8 ({error.reason})", error)
        if not text.strip():
            return None
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as error:
            return self._reject_line(location, error.msg, error)
        except (ValueError, RecursionError) as error:
            # Oversized integer literals and excessive nesting.
            return self._reject_line(location, str(error), error)
        if not isinstance(payload, dict):
            return self._reject_line(
                location, f"expected a JSON object, got {type(payload).__name__}", None
            )
        return payload

    def _reject_line(
        self,
        location: str,
        reason: str,
        error: Exception | None,
    ) -> None:
        if self._decode_policy == ABORT_DECODE_POLICY:
            raise NdQueryDecodeError(
                f"Failed to decode NDJSON record at {location}: {reason}. "
                "Fix the line or use the skip decode policy."
            ) from error
        self._skipped_line_count += 1
        _LOGGER.warning("source_line_skipped", location=location, reason=reason)
        return None
