"""Seven-day SPX put/call window backed by daily scrapes."""

from __future__ import annotations

from datetime import date, timedelta

from riskdash.core.config import CacheConfig
from riskdash.core.data.cache import CacheKey, CacheKind, CacheStrategy, ThreadSafeInMemoryCache
from riskdash.core.data.providers import CboeDailyStatsScraper
from riskdash.core.data.storage import PutCallRepository
from riskdash.core.exceptions import AcquisitionError
from riskdash.core.logging import logger
from riskdash.core.models import DailyPutCallStats
from riskdash.core.monitoring import MetricsCollector, get_metrics_collector

WINDOW_DAYS = 7
# Stored rows consulted when deciding which days still need scraping.
EXISTING_LOOKBACK = 30


def last_trading_days(count: int, as_of: date) -> list[date]:
    """The ``count`` weekdays before ``as_of``, newest first."""
    days: list[date] = []
    current = as_of - timedelta(days=1)
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current -= timedelta(days=1)
    return days


class PutCallWindowService:
    """Keeps the last seven trading days of SPX put/call figures in storage."""

    def __init__(
        self,
        scraper: CboeDailyStatsScraper,
        repository: PutCallRepository,
        *,
        cache: CacheStrategy | None = None,
        config: CacheConfig | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self.scraper = scraper
        self.repository = repository
        self.config = config or CacheConfig()
        self.cache = cache or ThreadSafeInMemoryCache(self.config.max_size)
        self._metrics = metrics

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    async def window(self, as_of: date) -> list[DailyPutCallStats]:
        """Stored readings for the last seven weekdays before ``as_of``, ascending.

        Only days missing from storage are scraped. A day whose scrape fails
        or finds no row is left out.
        """
        key = CacheKey("putcall", f"{WINDOW_DAYS}d", CacheKind.WINDOW, self.config)
        if self.config.enabled:
            cached = await self.cache.get(key.key)
            self.metrics.record_cache_lookup(key.kind.value, hit=cached is not None)
            if cached is not None:
                return cached

        days = last_trading_days(WINDOW_DAYS, as_of)
        existing = {row.date for row in await self.repository.get_latest_put_call_ratios(EXISTING_LOOKBACK)}
        missing = sorted(day for day in days if day not in existing)
        if missing:
            logger.bind(provider=self.scraper.name).info(f"Scraping put/call figures for {len(missing)} days")

        for day in missing:
            try:
                stats = await self.scraper.scrape(day)
            except AcquisitionError as exc:
                logger.bind(provider=self.scraper.name).warning(f"Skipping {day}: {exc.message}")
                continue
            if stats is not None:
                await self.repository.upsert_put_call_ratio(stats)

        rows = await self.repository.get_put_call_ratios(days)
        if self.config.enabled:
            await self.cache.set(key.key, rows, key.ttl)
        return rows
