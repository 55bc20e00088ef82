"""Pytest configuration for the riskdash test suite."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timedelta

import duckdb
import pytest
from prometheus_client import CollectorRegistry

from riskdash.core.data.storage import PutCallRepository
from riskdash.core.monitoring import MetricsCollector


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--riskdash-run-integration",
        action="store_true",
        default=False,
        help="Run riskdash integration tests that call live data sources.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: marks riskdash tests requiring network access",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--riskdash-run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --riskdash-run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


def business_days(start: date, count: int) -> list[date]:
    """``count`` consecutive weekdays from ``start`` (inclusive when a weekday)."""
    days: list[date] = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


@pytest.fixture
def weekdays() -> Callable[[date, int], list[date]]:
    return business_days


@pytest.fixture
def metrics() -> MetricsCollector:
    """Collector on a private registry so counters start at zero."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def connection():
    conn = duckdb.connect(":memory:")
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def repository(connection) -> PutCallRepository:
    return PutCallRepository(connection, now=lambda: datetime(2024, 6, 10, 12, 0))
