"""Data models module."""

from riskdash.core.models.period import Period
from riskdash.core.models.putcall import DailyPutCallStats, PutCallObservation
from riskdash.core.models.series import (
    AlignedRecord,
    DateValueMap,
    IndicatorPoint,
    IndicatorSeries,
    ScoredPoint,
    round_value,
)

__all__ = [
    "Period",
    "DateValueMap",
    "AlignedRecord",
    "IndicatorPoint",
    "ScoredPoint",
    "IndicatorSeries",
    "PutCallObservation",
    "DailyPutCallStats",
    "round_value",
]
