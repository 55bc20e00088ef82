"""Cache key generation."""

from enum import Enum

from riskdash.core.config import CacheConfig


class CacheKind(str, Enum):
    """What a cached entry holds."""

    HISTORY = "history"
    LATEST = "latest"
    WINDOW = "window"


class CacheKey:
    """Key ``"{indicator}:{period}:{kind}"`` with the TTL for its kind."""

    def __init__(self, indicator: str, period: str, kind: CacheKind, config: CacheConfig | None = None):
        self.indicator = indicator
        self.period = period
        self.kind = kind
        self.key = f"{indicator}:{period}:{kind.value}"
        self.ttl = self._calculate_ttl(config or CacheConfig())

    def _calculate_ttl(self, config: CacheConfig) -> int:
        ttl_mapping = {
            CacheKind.HISTORY: config.history_ttl,
            CacheKind.LATEST: config.latest_ttl,
            CacheKind.WINDOW: config.window_ttl,
        }
        return ttl_mapping[self.kind]

    def __str__(self) -> str:
        return self.key

    def __repr__(self) -> str:
        return f"CacheKey(key={self.key}, ttl={self.ttl})"
