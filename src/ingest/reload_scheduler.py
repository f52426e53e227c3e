"""Periodic source reload.

This module re-invokes the data manager on a fixed interval
and logs each outcome. Failures wait for the next tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import threading
from typing import Any, Callable, Sequence

from core.constants import DEFAULT_RELOAD_INTERVAL_SECONDS, IN_MEMORY_MODE
from core.errors import NdQueryConfigError, NdQueryError
from core.logging_config import get_logger
from core.types import FilterCondition
from store.data_manager import DataManager

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ReloadOutcome:
    """Result of one scheduled reload.

    Attributes:
        succeeded: Whether the pass completed.
        error: Failure raised by the pass, if any.
        result: Load summary or matching records on success.
    """

    succeeded: bool
    error: NdQueryError | None = None
    result: Any = None


class ReloadScheduler:
    """Background timer driving ``load`` or ``load_and_filter``."""

    def __init__(
        self,
        manager: DataManager,
        source_path: str | Path,
        key_field: str | None = None,
        conditions: Sequence[FilterCondition] | None = None,
        interval_seconds: float = DEFAULT_RELOAD_INTERVAL_SECONDS,
        on_result: Callable[[ReloadOutcome], None] | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise NdQueryConfigError(
                f"Invalid reload interval {interval_seconds}: must be positive."
            )
        if manager.mode == IN_MEMORY_MODE and not key_field:
            raise NdQueryConfigError(
                "Scheduled reloads in in_memory mode require a key field."
            )
        self._manager = manager
        self._source_path = Path(source_path)
        self._key_field = key_field
        self._conditions = list(conditions or [])
        self._interval_seconds = interval_seconds
        self._on_result = on_result
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> ReloadOutcome:
        """Run one reload pass and log its outcome.

        Returns:
            Outcome carrying the result or the domain error.
        """
        try:
            if self._manager.mode == IN_MEMORY_MODE:
                result: Any = self._manager.load(self._source_path, str(self._key_field))
            else:
                result = self._manager.load_and_filter(self._source_path, self._conditions)
        except NdQueryError as error:
            _LOGGER.error(
                "reload_failed",
                source_path=str(self._source_path),
                mode=self._manager.mode,
                error_type=type(error).__name__,
                error=str(error),
            )
            outcome = ReloadOutcome(succeeded=False, error=error)
        else:
            _LOGGER.info(
                "reload_succeeded",
                source_path=str(self._source_path),
                mode=self._manager.mode,
            )
            outcome = ReloadOutcome(succeeded=True, result=result)
        if self._on_result is not None:
            self._on_result(outcome)
        return outcome

    def start(self) -> None:
        """Start reloading on a daemon thread, beginning immediately.

        Raises:
            RuntimeError: If the scheduler is already running.
        """
        if self.running:
            raise RuntimeError("Reload scheduler is already running")
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop, name="ndquery-reload", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Signal the reload thread to stop and wait for it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            self.run_once()
            self._stop_event.wait(self._interval_seconds)
