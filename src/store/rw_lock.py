"""Reader-writer lock for the shared dataset snapshot.

This module lets many lookups and filter passes run concurrently
while a reload swap takes exclusive ownership.
"""

from __future__ import annotations

from contextlib import contextmanager
import threading
from typing import Iterator


class ReadWriteLock:
    """Reentrant, writer-preferring reader-writer lock.

    A thread may re-enter a read lock it already holds, and the thread that
    owns the write lock may also take read locks. New readers wait while a
    writer is queued so a reload swap is never starved by busy readers.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._writer_owner: int | None = None
        self._write_recursion = 0
        self._waiting_writers = 0
        self._reader_counts: dict[int, int] = {}

    def acquire_read(self) -> None:
        tid = threading.get_ident()
        with self._cond:
            if self._writer_owner != tid and tid not in self._reader_counts:
                while self._writer_owner is not None or self._waiting_writers:
                    self._cond.wait()
            self._reader_counts[tid] = self._reader_counts.get(tid, 0) + 1

    def release_read(self) -> None:
        tid = threading.get_ident()
        with self._cond:
            count = self._reader_counts.get(tid, 0)
            if count == 0:
                raise RuntimeError("Cannot release read lock: not held by this thread")
            if count == 1:
                del self._reader_counts[tid]
            else:
                self._reader_counts[tid] = count - 1
            if not self._reader_counts:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        tid = threading.get_ident()
        with self._cond:
            if self._writer_owner == tid:
                self._write_recursion += 1
                return
            if tid in self._reader_counts:
                raise RuntimeError("Cannot acquire write lock while holding a read lock")
            self._waiting_writers += 1
            try:
                while self._writer_owner is not None or self._reader_counts:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer_owner = tid
            self._write_recursion = 1

    def release_write(self) -> None:
        tid = threading.get_ident()
        with self._cond:
            if self._writer_owner != tid:
                raise RuntimeError("Cannot release write lock: not the owner")
            self._write_recursion -= 1
            if self._write_recursion == 0:
                self._writer_owner = None
                self._cond.notify_all()

    @contextmanager
    def read_lock(self) -> Iterator[None]:
        """Hold the shared lock for the duration of a ``with`` block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        """Hold the exclusive lock for the duration of a ``with`` block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
