"""Thread-safe in-memory cache."""

import time
from collections import OrderedDict
from collections.abc import Callable
from threading import Lock
from typing import Any

from .base import CacheStrategy


class ThreadSafeInMemoryCache(CacheStrategy):
    """LRU cache with per-entry expiry, guarded by a lock.

    Entries are lost on restart and concurrent writers race; the last write
    wins.
    """

    def __init__(self, max_size: int = 256, *, clock: Callable[[], float] = time.monotonic):
        self.max_size = max_size
        self._clock = clock
        self._cache: OrderedDict[str, tuple[Any, float]] = OrderedDict()
        self._lock = Lock()

    async def get(self, key: str) -> Any | None:
        with self._lock:
            if key not in self._cache:
                return None

            value, expiry = self._cache[key]
            if self._clock() >= expiry:
                del self._cache[key]
                return None

            self._cache.move_to_end(key)
            return value

    async def set(self, key: str, value: Any, ttl: int) -> None:
        expiry = self._clock() + ttl

        with self._lock:
            if key in self._cache:
                del self._cache[key]

            # evict least recently used
            while len(self._cache) >= self.max_size and self._cache:
                self._cache.popitem(last=False)

            self._cache[key] = (value, expiry)

    async def delete(self, key: str) -> bool:
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    async def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    async def get_ttl(self, key: str) -> int | None:
        with self._lock:
            if key not in self._cache:
                return None

            _, expiry = self._cache[key]
            remaining = expiry - self._clock()
            if remaining <= 0:
                del self._cache[key]
                return None

            return int(remaining)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def size(self) -> int:
        return len(self)
