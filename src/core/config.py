"""Runtime configuration model for ndquery.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DECODE_POLICY,
    DEFAULT_KEY_FIELD,
    DEFAULT_MEMORY_CEILING_BYTES,
    DEFAULT_RELOAD_INTERVAL_SECONDS,
    DEFAULT_STORAGE_MODE,
    SUPPORTED_DECODE_POLICIES,
    SUPPORTED_STORAGE_MODES,
)
from core.errors import NdQueryConfigError
from core.types import DecodePolicy, StorageMode


@dataclass(frozen=True)
class NdQueryConfig:
    """Validated runtime configuration.

    Attributes:
        mode: Storage mode, ``in_memory`` or ``split``.
        memory_ceiling: Maximum bytes a single pass may consume.
        source_path: Optional default NDJSON source path.
        key_field: Field used to key materialized records.
        decode_policy: Whether malformed lines abort or are skipped.
        reload_interval: Seconds between scheduled reloads.
    """

    mode: StorageMode
    memory_ceiling: int
    source_path: Path | None
    key_field: str
    decode_policy: DecodePolicy
    reload_interval: float

    @classmethod
    def from_env(cls) -> "NdQueryConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            NdQueryConfigError: If environment values are invalid.
        """
        source_value = os.getenv("NDQUERY_SOURCE_PATH")
        return cls(
            mode=parse_storage_mode(os.getenv("NDQUERY_MODE", DEFAULT_STORAGE_MODE)),
            memory_ceiling=parse_memory_ceiling(
                os.getenv("NDQUERY_MEMORY_CEILING", str(DEFAULT_MEMORY_CEILING_BYTES))
            ),
            source_path=Path(source_value).expanduser() if source_value else None,
            key_field=os.getenv("NDQUERY_KEY_FIELD", DEFAULT_KEY_FIELD),
            decode_policy=parse_decode_policy(
                os.getenv("NDQUERY_DECODE_POLICY", DEFAULT_DECODE_POLICY)
            ),
            reload_interval=_parse_reload_interval(
                os.getenv("NDQUERY_RELOAD_INTERVAL", str(DEFAULT_RELOAD_INTERVAL_SECONDS))
            ),
        )


def parse_storage_mode(raw_value: str) -> StorageMode:
    """Validate a storage mode name.

    Args:
        raw_value: Raw mode string.

    Returns:
        Validated storage mode.

    Raises:
        NdQueryConfigError: If mode is not supported.
    """
    if raw_value not in SUPPORTED_STORAGE_MODES:
        raise NdQueryConfigError(
            f"Invalid storage mode '{raw_value}'. "
            f"Use one of: {', '.join(SUPPORTED_STORAGE_MODES)}."
        )
    return raw_value  # type: ignore[return-value]


def parse_decode_policy(raw_value: str) -> DecodePolicy:
    """Validate a decode failure policy name.

    Args:
        raw_value: Raw policy string.

    Returns:
        Validated decode policy.

    Raises:
        NdQueryConfigError: If policy is not supported.
    """
    if raw_value not in SUPPORTED_DECODE_POLICIES:
        raise NdQueryConfigError(
            f"Invalid decode policy '{raw_value}'. "
            f"Use one of: {', '.join(SUPPORTED_DECODE_POLICIES)}."
        )
    return raw_value  # type: ignore[return-value]


def parse_memory_ceiling(raw_value: str) -> int:
    """Parse the memory ceiling value in bytes.

    Args:
        raw_value: Raw string from environment or CLI.

    Returns:
        Positive byte ceiling.

    Raises:
        NdQueryConfigError: If value is not a positive integer.
    """
    try:
        ceiling = int(raw_value)
    except ValueError as error:
        raise NdQueryConfigError(
            "Invalid NDQUERY_MEMORY_CEILING value: "
            f"expected integer bytes, got '{raw_value}'. "
            "Set NDQUERY_MEMORY_CEILING to a positive byte count."
        ) from error
    if ceiling <= 0:
        raise NdQueryConfigError(
            f"Invalid NDQUERY_MEMORY_CEILING value: {ceiling} must be positive."
        )
    return ceiling


def _parse_reload_interval(raw_value: str) -> float:
    """Parse the reload interval value in seconds.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive interval in seconds.

    Raises:
        NdQueryConfigError: If value is not a positive number.
    """
    try:
        interval = float(raw_value)
    except ValueError as error:
        raise NdQueryConfigError(
            "Invalid NDQUERY_RELOAD_INTERVAL value: "
            f"expected seconds, got '{raw_value}'. "
            "Set NDQUERY_RELOAD_INTERVAL to a positive number."
        ) from error
    if interval <= 0:
        raise NdQueryConfigError(
            f"Invalid NDQUERY_RELOAD_INTERVAL value: {interval} must be positive."
        )
    return interval
