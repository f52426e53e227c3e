"""Per-pass memory accounting.

This module tracks bytes consumed while scanning a source.
A budget belongs to exactly one pass and is never reset mid-pass.
"""

from __future__ import annotations

from core.errors import NdQueryMemoryLimitError


class MemoryBudget:
    """Monotonic byte counter bounded by a ceiling."""

    def __init__(self, ceiling_bytes: int) -> None:
        self._ceiling_bytes = ceiling_bytes
        self._consumed_bytes = 0

    @property
    def ceiling_bytes(self) -> int:
        return self._ceiling_bytes

    @property
    def consumed_bytes(self) -> int:
        return self._consumed_bytes

    @property
    def remaining_bytes(self) -> int:
        return self._ceiling_bytes - self._consumed_bytes

    def charge(self, byte_count: int) -> None:
        """Consume bytes from the budget.

        The charge is rejected before it is applied, so ``consumed_bytes``
        never exceeds the ceiling.

        Args:
            byte_count: Bytes about to be processed.

        Raises:
            NdQueryMemoryLimitError: If the charge would cross the ceiling.
        """
        projected = self._consumed_bytes + byte_count
        if projected > self._ceiling_bytes:
            raise NdQueryMemoryLimitError(
                f"Memory usage would reach {projected} bytes, exceeding the "
                f"{self._ceiling_bytes}-byte ceiling. Raise the ceiling or "
                "switch to split mode with narrower conditions.",
                ceiling_bytes=self._ceiling_bytes,
                consumed_bytes=projected,
            )
        self._consumed_bytes = projected
