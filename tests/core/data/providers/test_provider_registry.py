"""Tests for the provider registry and default wiring."""

import pytest

from riskdash.core.config import ProviderConfig
from riskdash.core.data.providers import (
    AccumulatedSeriesAdapter,
    FredAdapter,
    ProviderRegistry,
    create_daily_scraper,
    create_default_registry,
)
from riskdash.core.exceptions import DashboardError, ErrorCode
from riskdash.core.indicators import list_indicators


def test_default_registry_covers_every_catalogue_provider(repository) -> None:
    registry = create_default_registry(ProviderConfig(fred_api_key="k"), repository)

    providers = {provider for spec in list_indicators() for provider, _ in spec.sources}
    assert providers <= set(registry.names())
    assert isinstance(registry.get("fred"), FredAdapter)
    assert registry.get("fred").api_key == "k"
    assert isinstance(registry.get("accumulated"), AccumulatedSeriesAdapter)


def test_unknown_provider_is_a_configuration_error() -> None:
    registry = ProviderRegistry()

    with pytest.raises(DashboardError) as excinfo:
        registry.get("bloomberg")

    assert excinfo.value.error_code == ErrorCode.CONFIGURATION_ERROR.value
    assert "bloomberg" not in registry


def test_unregister_reports_presence(repository) -> None:
    registry = create_default_registry(ProviderConfig(), repository)

    assert registry.unregister("multpl") is True
    assert registry.unregister("multpl") is False
    assert "multpl" not in registry


def test_daily_scraper_uses_configured_template() -> None:
    scraper = create_daily_scraper(ProviderConfig(cboe_daily_url="https://stats.test/?dt={date}"))

    assert scraper.url_template == "https://stats.test/?dt={date}"
