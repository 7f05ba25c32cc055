from __future__ import annotations

import threading
import time
from dataclasses import dataclass

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter


@dataclass(frozen=True)
class QuotaStatus:
    limit: int
    remaining: int
    reset_ms: int


class SlidingWindowRateLimiter:
    """Per-client quota over a rolling window, backed by ``limits``.

    Uses the moving-window strategy on in-process ``MemoryStorage``: each
    admitted request is stored as a timestamped entry and only entries inside
    the trailing window count. Rejected requests are never recorded.

    ``limits`` expires old entries on its own; ``sweep()`` additionally clears
    the storage keys of clients with nothing left in the window.
    """

    def __init__(self, *, limit: int, window_seconds: float) -> None:
        if limit < 0:
            raise ValueError("limit must be >= 0")
        if int(window_seconds) < 1:
            raise ValueError("window_seconds must be >= 1")
        self.limit = int(limit)
        self.window_seconds = int(window_seconds)

        self._item = RateLimitItemPerSecond(self.limit, self.window_seconds)
        self._storage = MemoryStorage()
        self._strategy = MovingWindowRateLimiter(self._storage)
        # Guards the client set so a sweep never clears a key mid-hit.
        self._clients: set[str] = set()
        self._lock = threading.Lock()

    def check_and_record(self, identifier: str) -> bool:
        if self.limit == 0:
            return False
        with self._lock:
            admitted = self._strategy.hit(self._item, identifier)
            if admitted:
                self._clients.add(identifier)
        return admitted

    def status(self, identifier: str) -> QuotaStatus:
        stats = self._strategy.get_window_stats(self._item, identifier)
        remaining = max(0, min(self.limit, stats.remaining))

        if self.limit == 0 or remaining == self.limit:
            reset_ms = self.window_seconds * 1000
        else:
            reset_ms = max(0, int((stats.reset_time - time.time()) * 1000))
        return QuotaStatus(limit=self.limit, remaining=remaining, reset_ms=reset_ms)

    def _idle(self, identifier: str) -> bool:
        return self._strategy.get_window_stats(self._item, identifier).remaining >= self.limit

    def sweep(self) -> int:
        """Forget clients with no request inside the window. Returns the number evicted."""
        with self._lock:
            stale = [client for client in self._clients if self._idle(client)]
            for client in stale:
                self._storage.clear(self._item.key_for(client))
                self._clients.discard(client)
        return len(stale)

    @property
    def tracked_identifiers(self) -> int:
        with self._lock:
            return len(self._clients)
