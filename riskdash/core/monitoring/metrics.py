"""Prometheus metrics helpers for riskdash services."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import DefaultDict

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, generate_latest


@dataclass
class _ProviderStats:
    """Internal container tracking provider level success and failure counts."""

    total: int = 0
    failures: int = 0


class MetricsCollector:
    """Collects and exposes core Prometheus metrics for service operations."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.fetch_latency_seconds = Histogram(
            "riskdash_fetch_latency_seconds",
            "Latency distribution for upstream series fetches.",
            ("provider",),
            buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, float("inf")),
            registry=self.registry,
        )
        self.fetch_requests_total = Counter(
            "riskdash_fetch_requests_total",
            "Total count of upstream series fetches.",
            ("provider",),
            registry=self.registry,
        )
        self.fetch_failures_total = Counter(
            "riskdash_fetch_failures_total",
            "Total count of failed upstream series fetches.",
            ("provider",),
            registry=self.registry,
        )
        self.provider_error_rate = Gauge(
            "riskdash_provider_error_rate",
            "Error rate for upstream data providers (0-1 range).",
            ("provider",),
            registry=self.registry,
        )
        self.dropped_observations_total = Counter(
            "riskdash_dropped_observations_total",
            "Source rows dropped because they could not be parsed.",
            ("source",),
            registry=self.registry,
        )
        self.pipeline_runs_total = Counter(
            "riskdash_pipeline_runs_total",
            "Indicator pipeline executions grouped by outcome.",
            ("indicator", "status"),
            registry=self.registry,
        )
        self.dropped_records_total = Counter(
            "riskdash_dropped_records_total",
            "Aligned records discarded by an indicator transform.",
            ("indicator",),
            registry=self.registry,
        )
        self.cache_requests_total = Counter(
            "riskdash_cache_requests_total",
            "Result cache lookups grouped by outcome.",
            ("kind", "status"),
            registry=self.registry,
        )
        self._provider_stats: DefaultDict[str, _ProviderStats] = defaultdict(_ProviderStats)

    def observe_fetch(self, provider: str, latency_seconds: float, *, success: bool = True) -> None:
        """Record an upstream fetch execution."""

        self.fetch_latency_seconds.labels(provider=provider).observe(latency_seconds)
        self._record_outcome(provider=provider, success=success)

    def record_dropped_observations(self, source: str, count: int) -> None:
        """Count source rows an adapter skipped."""

        if count > 0:
            self.dropped_observations_total.labels(source=source).inc(count)

    def record_pipeline_run(self, indicator: str, *, success: bool, dropped_records: int = 0) -> None:
        self.pipeline_runs_total.labels(indicator=indicator, status="success" if success else "failure").inc()
        if dropped_records > 0:
            self.dropped_records_total.labels(indicator=indicator).inc(dropped_records)

    def record_cache_lookup(self, kind: str, *, hit: bool) -> None:
        label = kind if kind in _ALLOWED_CACHE_KINDS else "__other__"
        self.cache_requests_total.labels(kind=label, status="hit" if hit else "miss").inc()

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)

    def _record_outcome(self, *, provider: str, success: bool) -> None:
        stats = self._provider_stats[provider]
        stats.total += 1
        self.fetch_requests_total.labels(provider=provider).inc()
        if not success:
            stats.failures += 1
            self.fetch_failures_total.labels(provider=provider).inc()
        error_rate = stats.failures / stats.total if stats.total else 0.0
        self.provider_error_rate.labels(provider=provider).set(error_rate)


_DEFAULT_COLLECTOR: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Return the global metrics collector instance."""

    global _DEFAULT_COLLECTOR
    if _DEFAULT_COLLECTOR is None:
        _DEFAULT_COLLECTOR = MetricsCollector()
    return _DEFAULT_COLLECTOR


def configure_metrics_collector(collector: MetricsCollector | None) -> None:
    """Override the global metrics collector for application wiring or tests."""

    global _DEFAULT_COLLECTOR
    _DEFAULT_COLLECTOR = collector


_ALLOWED_CACHE_KINDS = {"history", "latest", "window"}
