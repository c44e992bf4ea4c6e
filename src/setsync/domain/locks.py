"""Per-retailer-id serialization of read-then-write sequences."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class RetailerLocks:
    """In-process locks keyed by retailer id, dropped once nobody holds or waits."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._holders: dict[str, int] = {}

    @contextmanager
    def hold(self, retailer_id: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(retailer_id, threading.Lock())
            self._holders[retailer_id] = self._holders.get(retailer_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[retailer_id] -= 1
                if self._holders[retailer_id] == 0:
                    del self._holders[retailer_id]
                    del self._locks[retailer_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
