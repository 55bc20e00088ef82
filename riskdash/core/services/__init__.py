"""Application services."""

from riskdash.core.services.container import ServiceContainer, build_services
from riskdash.core.services.indicators import IndicatorService
from riskdash.core.services.putcall import PutCallWindowService, last_trading_days

__all__ = [
    "IndicatorService",
    "PutCallWindowService",
    "ServiceContainer",
    "build_services",
    "last_trading_days",
]
