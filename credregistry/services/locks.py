"""Per-entity critical sections for check-then-act operations.

FastAPI runs plain ``def`` endpoints on a thread pool, so two requests
can renew and revoke the same credential at the same time.  Each engine
operation reads a record, checks its state, and writes a new version;
without a lock between the read and the write one of the updates is
lost.  KeyedLock hands out one lock per entity id so unrelated
credentials never contend, and drops it once nobody holds or waits on it.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class KeyedLock:
    """One lock per key, kept only while some caller holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, _Entry] = {}

    def _checkout(self, key: str) -> threading.Lock:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = _Entry()
            entry.users += 1
            return entry.lock

    def _checkin(self, key: str) -> None:
        with self._guard:
            entry = self._locks[key]
            entry.users -= 1
            if entry.users == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        """Acquire the locks for all ``keys``.

        Keys are deduplicated and taken in sorted order so two callers
        locking the same pair can never deadlock.
        """
        ordered = sorted(set(keys))
        locks = [self._checkout(k) for k in ordered]
        acquired: list[threading.Lock] = []
        try:
            for lock in locks:
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
            for key in ordered:
                self._checkin(key)
