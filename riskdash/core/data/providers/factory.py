"""Wiring of the default provider registry from configuration."""

from __future__ import annotations

from riskdash.core.config import ProviderConfig
from riskdash.core.data.providers.accumulated import AccumulatedSeriesAdapter
from riskdash.core.data.providers.cboe import CboeArchiveAdapter, CboeDailyStatsScraper
from riskdash.core.data.providers.fred import FredAdapter
from riskdash.core.data.providers.http import HttpClient, HttpConfig
from riskdash.core.data.providers.multpl import MultplEpsAdapter
from riskdash.core.data.providers.registry import ProviderRegistry
from riskdash.core.data.providers.statestreet import StateStreetAdapter
from riskdash.core.data.providers.ycharts import YChartsPutCallScraper
from riskdash.core.data.storage import PutCallRepository
from riskdash.core.monitoring import MetricsCollector


def create_http_client(config: ProviderConfig) -> HttpClient:
    return HttpClient(HttpConfig(timeout=config.timeout, user_agent=config.user_agent))


def create_default_registry(
    config: ProviderConfig,
    repository: PutCallRepository,
    *,
    http: HttpClient | None = None,
    metrics: MetricsCollector | None = None,
) -> ProviderRegistry:
    """Register every adapter the catalogue refers to."""
    client = http or create_http_client(config)
    registry = ProviderRegistry()
    registry.register(FredAdapter(config.fred_api_key, client, base_url=config.fred_base_url, metrics=metrics))
    registry.register(CboeArchiveAdapter(client, url_template=config.cboe_archive_url, metrics=metrics))
    registry.register(StateStreetAdapter(client, url_template=config.statestreet_url, metrics=metrics))
    registry.register(MultplEpsAdapter(client, url=config.multpl_url, metrics=metrics))
    registry.register(
        AccumulatedSeriesAdapter(
            YChartsPutCallScraper(client, url=config.ycharts_url),
            repository,
            metrics=metrics,
        )
    )
    return registry


def create_daily_scraper(config: ProviderConfig, *, http: HttpClient | None = None) -> CboeDailyStatsScraper:
    return CboeDailyStatsScraper(http or create_http_client(config), url_template=config.cboe_daily_url)
