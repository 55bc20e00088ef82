"""Normalization pipeline: alignment, transforms, rolling z-scores and period windows."""

from riskdash.core.pipeline.alignment import align_series
from riskdash.core.pipeline.windowing import PeriodWindow, parse_period, resolve_window, truncate
from riskdash.core.pipeline.zscore import rolling_zscores, score_points

__all__ = [
    "align_series",
    "rolling_zscores",
    "score_points",
    "PeriodWindow",
    "resolve_window",
    "truncate",
    "parse_period",
]
