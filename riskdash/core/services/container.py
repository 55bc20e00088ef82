"""Assembly of the service graph from configuration."""

from __future__ import annotations

from dataclasses import dataclass

from duckdb import DuckDBPyConnection

from riskdash.core.config import DashboardConfig
from riskdash.core.data.cache import ThreadSafeInMemoryCache
from riskdash.core.data.providers import (
    CboeDailyStatsScraper,
    ProviderRegistry,
    create_daily_scraper,
    create_default_registry,
    create_http_client,
)
from riskdash.core.data.storage import DuckDBFactory, DuckDBFactoryConfig, PutCallRepository
from riskdash.core.logging import logger
from riskdash.core.pipeline.engine import IndicatorPipeline
from riskdash.core.services.indicators import IndicatorService
from riskdash.core.services.putcall import PutCallWindowService


@dataclass
class ServiceContainer:
    """Long-lived objects shared by the web app and the CLI."""

    config: DashboardConfig
    indicators: IndicatorService
    putcall: PutCallWindowService
    registry: ProviderRegistry | None = None
    scraper: CboeDailyStatsScraper | None = None
    connection: DuckDBPyConnection | None = None

    async def aclose(self) -> None:
        if self.registry is not None:
            await self.registry.close()
        if self.scraper is not None:
            await self.scraper.close()
        if self.connection is not None:
            self.connection.close()
            self.connection = None


def build_services(config: DashboardConfig) -> ServiceContainer:
    """Wire storage, adapters, pipeline and services for ``config``."""
    factory = DuckDBFactory(DuckDBFactoryConfig(database=config.storage.database_path))
    connection = factory.create_connection()
    repository = PutCallRepository(connection)

    http = create_http_client(config.providers)
    registry = create_default_registry(config.providers, repository, http=http)
    scraper = create_daily_scraper(config.providers, http=http)

    cache = ThreadSafeInMemoryCache(config.cache.max_size)
    indicators = IndicatorService(IndicatorPipeline(registry), cache=cache, config=config.cache)
    putcall = PutCallWindowService(scraper, repository, cache=cache, config=config.cache)

    logger.info(
        f"Services ready: providers={registry.names()}, database={config.storage.database_path}, "
        f"cache={'on' if config.cache.enabled else 'off'}"
    )
    return ServiceContainer(
        config=config,
        indicators=indicators,
        putcall=putcall,
        registry=registry,
        scraper=scraper,
        connection=connection,
    )
