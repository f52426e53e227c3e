"""Core constants used across ndquery modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

IN_MEMORY_MODE = "in_memory"
SPLIT_MODE = "split"
SUPPORTED_STORAGE_MODES = (IN_MEMORY_MODE, SPLIT_MODE)
DEFAULT_STORAGE_MODE = IN_MEMORY_MODE

ABORT_DECODE_POLICY = "abort"
SKIP_DECODE_POLICY = "skip"
SUPPORTED_DECODE_POLICIES = (ABORT_DECODE_POLICY, SKIP_DECODE_POLICY)
DEFAULT_DECODE_POLICY = ABORT_DECODE_POLICY

DEFAULT_MEMORY_CEILING_BYTES = 2 * 1024 * 1024 * 1024
DEFAULT_KEY_FIELD = "id"
DEFAULT_RELOAD_INTERVAL_SECONDS = 60.0

DATE_LAYOUT = "%Y-%m-%d"
DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"
SOURCE_ENCODING = "utf-8"

SUPPORTED_VALUE_TYPES = ("int", "string", "date", "datetime", "bool")
