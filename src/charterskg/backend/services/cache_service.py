"""In-memory cache with TTL support."""

from __future__ import annotations

import base64
import threading
import time
from typing import Any, Callable

DEFAULT_TTL = 3600
DEFAULT_CHECK_PERIOD = 600


class MemoryCache:
    """Thread-safe in-memory cache with per-key TTL.

    Expired entries are never returned: ``get`` checks the expiry time on
    every read. In addition, whenever ``check_period`` seconds have passed
    since the last sweep, the next ``get`` or ``set`` removes every expired
    entry. There is no size bound, so memory grows with the number of
    distinct keys stored within one TTL window.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        check_period: float = DEFAULT_CHECK_PERIOD,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.check_period = check_period
        self._clock = clock
        self._store: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def get(self, key: str) -> Any | None:
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            entry = self._store.get(key)
            if entry is None:
                return None
            expires, value = entry
            if now >= expires:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            lifetime = self.ttl if ttl is None else ttl
            self._store[key] = (now + lifetime, value)

    def sweep(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        with self._lock:
            return self._sweep(self._clock())

    # -- internals (caller holds the lock) ------------------------------

    def _maybe_sweep(self, now: float) -> None:
        if now - self._last_sweep >= self.check_period:
            self._sweep(now)

    def _sweep(self, now: float) -> int:
        expired = [k for k, (expires, _) in self._store.items() if now >= expires]
        for k in expired:
            del self._store[k]
        self._last_sweep = now
        return len(expired)


def cache_key(query: str) -> str:
    """Encode *query* as a reversible cache key (base64 of its UTF-8 bytes)."""
    return base64.b64encode(query.encode("utf-8")).decode("ascii")
