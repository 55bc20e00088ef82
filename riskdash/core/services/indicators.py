"""Indicator service: catalogue lookups and cached pipeline runs."""

from __future__ import annotations

from datetime import date
from typing import Any

from riskdash.core.config import CacheConfig
from riskdash.core.data.cache import CacheKey, CacheKind, CacheStrategy, ThreadSafeInMemoryCache
from riskdash.core.indicators import IndicatorSpec, get_indicator, list_indicators
from riskdash.core.logging import logger
from riskdash.core.models import IndicatorSeries, Period
from riskdash.core.monitoring import MetricsCollector, get_metrics_collector
from riskdash.core.pipeline.engine import IndicatorPipeline
from riskdash.core.pipeline.windowing import parse_period


class IndicatorService:
    """Serves indicator series, caching each computed result.

    The cache sits in front of the pipeline; the pipeline itself never reads
    or writes it.
    """

    def __init__(
        self,
        pipeline: IndicatorPipeline,
        *,
        cache: CacheStrategy | None = None,
        config: CacheConfig | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self.pipeline = pipeline
        self.config = config or CacheConfig()
        self.cache = cache or ThreadSafeInMemoryCache(self.config.max_size)
        self._metrics = metrics

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    def catalogue(self) -> list[dict[str, Any]]:
        return [spec.describe() for spec in list_indicators()]

    def resolve(self, name: str, period: str | Period | None) -> tuple[IndicatorSpec, Period]:
        """Validate ``name`` and ``period``; ``None`` selects the default period."""
        spec = get_indicator(name)
        return spec, parse_period(period or spec.default_period, spec.periods)

    async def history(self, name: str, period: str | Period | None, as_of: date) -> IndicatorSeries:
        """Scored series for ``name`` over ``period`` ending at ``as_of``.

        Raises:
            UnknownIndicatorError: if ``name`` is not in the catalogue
            UnsupportedPeriodError: if the indicator does not offer ``period``
            AcquisitionError: if a source fetch fails
        """
        spec, resolved = self.resolve(name, period)
        key = CacheKey(spec.name, resolved.value, CacheKind.HISTORY, self.config)

        cached = await self._lookup(key)
        if cached is not None:
            return cached
        return await self._compute(spec, resolved, as_of)

    async def latest(self, name: str, as_of: date) -> dict[str, Any]:
        """Most recent record of the indicator's default-period series."""
        spec = get_indicator(name)
        key = CacheKey(spec.name, spec.default_period.value, CacheKind.LATEST, self.config)

        cached = await self._lookup(key)
        if cached is not None:
            return cached

        # The latest entry expires well before the history entry, so a miss
        # recomputes and refreshes the cached history too.
        series = await self._compute(spec, spec.default_period, as_of)
        point = series.latest
        payload: dict[str, Any] = {
            "indicator": spec.name,
            "period": spec.default_period.value,
            "record": series.to_record(point) if point else None,
            "window_filled": point.window_filled if point else False,
        }
        await self._store(key, payload, key.ttl)
        return payload

    async def invalidate(self, name: str) -> None:
        """Drop every cached entry of ``name``."""
        spec = get_indicator(name)
        for period in spec.periods:
            for kind in (CacheKind.HISTORY, CacheKind.LATEST):
                await self.cache.delete(CacheKey(spec.name, period.value, kind).key)

    async def _compute(self, spec: IndicatorSpec, period: Period, as_of: date) -> IndicatorSeries:
        series = await self.pipeline.run(spec, period, as_of)
        key = CacheKey(spec.name, period.value, CacheKind.HISTORY, self.config)
        await self._store(key, series, spec.cache_ttl or key.ttl)
        return series

    async def _lookup(self, key: CacheKey) -> Any | None:
        if not self.config.enabled:
            return None
        value = await self.cache.get(key.key)
        self.metrics.record_cache_lookup(key.kind.value, hit=value is not None)
        if value is not None:
            logger.bind(indicator=key.indicator).debug(f"Cache hit for {key.key}")
        return value

    async def _store(self, key: CacheKey, value: Any, ttl: int) -> None:
        if self.config.enabled:
            await self.cache.set(key.key, value, ttl)
