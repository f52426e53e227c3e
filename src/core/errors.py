"""ndquery exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Only whole-pass failures are raised; per-field type problems never are.
"""

from __future__ import annotations


class NdQueryError(Exception):
    """Base exception for all ndquery failures."""


class NdQueryConfigError(NdQueryError):
    """Raised for invalid runtime configuration."""


class NdQuerySourceError(NdQueryError):
    """Raised when the source file is missing or unreadable."""


class NdQueryDecodeError(NdQueryError):
    """Raised when a source line is not a valid JSON object."""


class NdQueryMemoryLimitError(NdQueryError):
    """Raised when a pass consumes more bytes than the memory ceiling allows.

    Attributes:
        ceiling_bytes: Configured ceiling for the pass.
        consumed_bytes: Bytes the pass would have consumed including the
            line that crossed the ceiling.
    """

    def __init__(self, message: str, ceiling_bytes: int, consumed_bytes: int) -> None:
        super().__init__(message)
        self.ceiling_bytes = ceiling_bytes
        self.consumed_bytes = consumed_bytes


class NdQueryModeError(NdQueryError):
    """Raised when an operation is called in the wrong storage mode."""


class NdQueryConditionError(NdQueryError):
    """Raised for structurally invalid filter condition definitions."""
