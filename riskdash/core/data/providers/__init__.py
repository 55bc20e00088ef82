"""Series acquisition adapters."""

from riskdash.core.data.providers.accumulated import AccumulatedSeriesAdapter
from riskdash.core.data.providers.base import SeriesAdapter, SeriesBundle, clip, parse_number
from riskdash.core.data.providers.cboe import CboeArchiveAdapter, CboeDailyStatsScraper, parse_daily_stats
from riskdash.core.data.providers.factory import (
    create_daily_scraper,
    create_default_registry,
    create_http_client,
)
from riskdash.core.data.providers.fred import FredAdapter
from riskdash.core.data.providers.http import HttpClient, HttpConfig
from riskdash.core.data.providers.multpl import MultplEpsAdapter, parse_eps_table
from riskdash.core.data.providers.registry import ProviderRegistry
from riskdash.core.data.providers.statestreet import StateStreetAdapter, parse_sheet_date
from riskdash.core.data.providers.ycharts import ScrapedPutCall, YChartsPutCallScraper, parse_ycharts_page

__all__ = [
    "SeriesAdapter",
    "SeriesBundle",
    "ProviderRegistry",
    "HttpClient",
    "HttpConfig",
    "FredAdapter",
    "CboeArchiveAdapter",
    "CboeDailyStatsScraper",
    "StateStreetAdapter",
    "MultplEpsAdapter",
    "YChartsPutCallScraper",
    "ScrapedPutCall",
    "AccumulatedSeriesAdapter",
    "create_default_registry",
    "create_daily_scraper",
    "create_http_client",
    "clip",
    "parse_number",
    "parse_daily_stats",
    "parse_eps_table",
    "parse_sheet_date",
    "parse_ycharts_page",
]
