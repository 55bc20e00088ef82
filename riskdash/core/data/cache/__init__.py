"""Result cache."""

from riskdash.core.data.cache.base import CacheStrategy
from riskdash.core.data.cache.key import CacheKey, CacheKind
from riskdash.core.data.cache.memory import ThreadSafeInMemoryCache

__all__ = [
    "CacheStrategy",
    "CacheKey",
    "CacheKind",
    "ThreadSafeInMemoryCache",
]
