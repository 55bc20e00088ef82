"""Indicator catalogue module."""

from riskdash.core.indicators.base import ExtraSpec, IndicatorSpec, InputRole, InputSpec
from riskdash.core.indicators.catalogue import (
    INDICATORS,
    get_indicator,
    indicator_names,
    list_indicators,
)

__all__ = [
    "IndicatorSpec",
    "InputSpec",
    "InputRole",
    "ExtraSpec",
    "INDICATORS",
    "get_indicator",
    "indicator_names",
    "list_indicators",
]
