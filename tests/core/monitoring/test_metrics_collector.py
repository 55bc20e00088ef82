"""Tests for the Prometheus metrics collector."""

from prometheus_client import CollectorRegistry

from riskdash.core.monitoring import MetricsCollector, configure_metrics_collector, get_metrics_collector


def test_observe_fetch_updates_counters_and_error_rate() -> None:
    registry = CollectorRegistry()
    collector = MetricsCollector(registry=registry)

    collector.observe_fetch("fred", 0.25, success=True)
    collector.observe_fetch("fred", 0.40, success=False)

    assert registry.get_sample_value("riskdash_fetch_latency_seconds_count", {"provider": "fred"}) == 2.0
    assert registry.get_sample_value("riskdash_fetch_requests_total", {"provider": "fred"}) == 2.0
    assert registry.get_sample_value("riskdash_fetch_failures_total", {"provider": "fred"}) == 1.0
    assert registry.get_sample_value("riskdash_provider_error_rate", {"provider": "fred"}) == 0.5


def test_pipeline_and_drop_counters() -> None:
    registry = CollectorRegistry()
    collector = MetricsCollector(registry=registry)

    collector.record_pipeline_run("hy-ig-ratio", success=True, dropped_records=3)
    collector.record_pipeline_run("hy-ig-ratio", success=False)
    collector.record_dropped_observations("cboe:indexpc", 0)
    collector.record_dropped_observations("cboe:indexpc", 4)

    assert registry.get_sample_value(
        "riskdash_pipeline_runs_total", {"indicator": "hy-ig-ratio", "status": "success"}
    ) == 1.0
    assert registry.get_sample_value(
        "riskdash_pipeline_runs_total", {"indicator": "hy-ig-ratio", "status": "failure"}
    ) == 1.0
    assert registry.get_sample_value("riskdash_dropped_records_total", {"indicator": "hy-ig-ratio"}) == 3.0
    assert registry.get_sample_value("riskdash_dropped_observations_total", {"source": "cboe:indexpc"}) == 4.0


def test_cache_lookups_group_unknown_kinds() -> None:
    registry = CollectorRegistry()
    collector = MetricsCollector(registry=registry)

    collector.record_cache_lookup("history", hit=True)
    collector.record_cache_lookup("bogus", hit=False)

    assert registry.get_sample_value("riskdash_cache_requests_total", {"kind": "history", "status": "hit"}) == 1.0
    assert registry.get_sample_value("riskdash_cache_requests_total", {"kind": "__other__", "status": "miss"}) == 1.0
    assert b"riskdash_cache_requests_total" in collector.render()


def test_global_collector_can_be_overridden() -> None:
    collector = MetricsCollector(registry=CollectorRegistry())
    configure_metrics_collector(collector)
    try:
        assert get_metrics_collector() is collector
    finally:
        configure_metrics_collector(None)
