"""Indicator pipeline: acquire, align, transform, score, truncate."""

from __future__ import annotations

import asyncio
import math
import time
from collections.abc import Mapping, Sequence
from datetime import date, timedelta

from riskdash.core.data.providers import ProviderRegistry, SeriesBundle
from riskdash.core.exceptions import AcquisitionError, DashboardError
from riskdash.core.indicators.base import IndicatorSpec, InputRole, InputSpec
from riskdash.core.logging import logger
from riskdash.core.models import AlignedRecord, DateValueMap, IndicatorPoint, IndicatorSeries, Period
from riskdash.core.monitoring import MetricsCollector, get_metrics_collector
from riskdash.core.pipeline.alignment import align_series
from riskdash.core.pipeline.windowing import PeriodWindow, resolve_window, truncate
from riskdash.core.pipeline.zscore import score_points

# Extra history requested for forward-filled sources so the first shared date
# has an earlier observation to carry.
SOFT_LOOKBACK = timedelta(days=400)

SourceKey = tuple[str, str]


class IndicatorPipeline:
    """Computes one indicator series from its providers.

    Stateless apart from the provider registry: no caching and no retries.
    Any failed fetch fails the whole computation.
    """

    def __init__(self, providers: ProviderRegistry, *, metrics: MetricsCollector | None = None):
        self.providers = providers
        self._metrics = metrics

    @property
    def metrics(self) -> MetricsCollector:
        return self._metrics or get_metrics_collector()

    async def run(self, spec: IndicatorSpec, period: Period, as_of: date) -> IndicatorSeries:
        """Compute ``spec`` for ``period`` ending at ``as_of``.

        Scores are computed over the full fetched history, warm-up included,
        before truncating to the display window.

        Raises:
            AcquisitionError: if any source fetch fails
        """
        log = logger.bind(indicator=spec.name)
        window = resolve_window(
            period,
            as_of=as_of,
            warmup_years=spec.warmup_years,
            earliest=spec.earliest,
            series_end=spec.series_end,
        )
        log.debug(
            f"Resolved {period.value} window: fetch from {window.fetch_start}, "
            f"display {window.display_start}..{window.end}"
        )

        try:
            bundles = await self._acquire(spec, window)
            hard, soft, exact = self._split_inputs(spec, bundles)
            records = align_series(hard, soft)
            points, dropped = self._transform(spec, records, exact)
            scored = score_points(points, spec.window)
            visible = truncate(scored, window)
        except Exception:
            self.metrics.record_pipeline_run(spec.name, success=False)
            raise

        self.metrics.record_pipeline_run(spec.name, success=True, dropped_records=dropped)
        log.info(
            f"Computed {spec.name} ({period.value}): {len(records)} aligned, "
            f"{dropped} dropped, {len(visible)} displayed"
        )
        return IndicatorSeries(
            indicator=spec.name,
            period=period,
            value_field=spec.value_field,
            window_size=spec.window,
            display_start=window.display_start,
            display_end=window.end,
            points=visible,
            dropped_records=dropped,
            decimals=spec.field_decimals(),
        )

    async def _acquire(self, spec: IndicatorSpec, window: PeriodWindow) -> dict[SourceKey, SeriesBundle]:
        sources = spec.sources
        results = await asyncio.gather(
            *(self._fetch_source(spec, provider, dataset, window) for provider, dataset in sources),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return dict(zip(sources, results, strict=True))

    async def _fetch_source(
        self, spec: IndicatorSpec, provider: str, dataset: str, window: PeriodWindow
    ) -> SeriesBundle:
        adapter = self.providers.get(provider)
        start = window.fetch_start
        roles = {i.role for i in spec.inputs if (i.provider, i.dataset) == (provider, dataset)}
        if roles == {InputRole.SOFT}:
            start -= SOFT_LOOKBACK

        started = time.perf_counter()
        try:
            bundle = await adapter.fetch(dataset, spec.fields_for(provider, dataset), start, window.end)
        except DashboardError:
            self.metrics.observe_fetch(provider, time.perf_counter() - started, success=False)
            raise
        except Exception as exc:
            self.metrics.observe_fetch(provider, time.perf_counter() - started, success=False)
            logger.bind(indicator=spec.name, provider=provider).exception(f"Unexpected failure fetching {dataset}")
            raise AcquisitionError(
                f"Failed to fetch {dataset} from {provider}: {exc}",
                provider,
                details={"dataset": dataset, "indicator": spec.name},
            ) from exc
        self.metrics.observe_fetch(provider, time.perf_counter() - started, success=True)
        return bundle

    @staticmethod
    def _split_inputs(
        spec: IndicatorSpec, bundles: dict[SourceKey, SeriesBundle]
    ) -> tuple[dict[str, DateValueMap], dict[str, DateValueMap], dict[str, DateValueMap]]:
        groups: dict[InputRole, dict[str, DateValueMap]] = {role: {} for role in InputRole}
        for item in spec.inputs:
            values = bundles[(item.provider, item.dataset)].get(item.source_field)
            if values is None:
                raise AcquisitionError(
                    f"{item.provider} returned no '{item.source_field}' field for {item.dataset}",
                    item.provider,
                    details={"dataset": item.dataset, "indicator": spec.name},
                )
            groups[item.role][item.name] = values
        return groups[InputRole.HARD], groups[InputRole.SOFT], groups[InputRole.EXACT]

    @staticmethod
    def _transform(
        spec: IndicatorSpec,
        records: Sequence[AlignedRecord],
        exact: Mapping[str, DateValueMap],
    ) -> tuple[list[IndicatorPoint], int]:
        displayed = [i for i in spec.inputs if i.display]
        points: list[IndicatorPoint] = []
        dropped = 0
        for record in records:
            value = spec.transform(record.inputs)
            extras = {extra.name: extra.transform(record.inputs) for extra in spec.extras}
            if not _usable(value) or not all(_usable(v) for v in extras.values()):
                dropped += 1
                continue
            points.append(
                IndicatorPoint(
                    date=record.date,
                    raw_fields={i.name: _display_value(i, record, exact) for i in displayed},
                    extras=extras,
                    value=value,
                )
            )
        return points, dropped


def _usable(value: float | None) -> bool:
    return value is not None and math.isfinite(value)


def _display_value(item: InputSpec, record: AlignedRecord, exact: Mapping[str, DateValueMap]) -> float | None:
    if item.role is InputRole.EXACT:
        value = exact[item.name].get(record.date)
    else:
        value = record.inputs[item.name]
    return None if value is None else value * item.scale
