"""Causal rolling z-score engine."""

from collections.abc import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from riskdash.core.models import IndicatorPoint, ScoredPoint

# Relative tolerance below which a window's standard deviation counts as zero.
ZERO_VARIANCE_TOLERANCE = 1e-12


def rolling_zscores(values: Sequence[float], window: int) -> list[float]:
    """Score each value against the ``window`` values strictly before it.

    Uses the population mean and standard deviation of the preceding window.
    The first ``window`` positions score ``0.0``. A window counts as zero
    variance, and also scores ``0.0``, when its standard deviation is at most
    ``ZERO_VARIANCE_TOLERANCE * max(1, |mean|)``, so rounding noise on a run
    of large constant values still scores ``0.0``.

    Args:
        values: observations in ascending date order
        window: number of preceding observations per window

    Returns:
        One score per input value.

    Raises:
        ValueError: if ``window`` is smaller than 1
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    arr = np.asarray(values, dtype=float)
    scores = np.zeros(arr.size, dtype=float)
    if arr.size <= window:
        return scores.tolist()

    windows = sliding_window_view(arr[:-1], window)
    mean = windows.mean(axis=1)
    std = windows.std(axis=1, ddof=0)
    current = arr[window:]

    tolerance = ZERO_VARIANCE_TOLERANCE * np.maximum(1.0, np.abs(mean))
    spread = std > tolerance
    safe_std = np.where(spread, std, 1.0)
    scores[window:] = np.where(spread, (current - mean) / safe_std, 0.0)
    return scores.tolist()


def score_points(points: Sequence[IndicatorPoint], window: int) -> list[ScoredPoint]:
    """Attach rolling z-scores to a full ascending indicator history."""
    scores = rolling_zscores([p.value for p in points], window)
    return [
        ScoredPoint(
            date=point.date,
            raw_fields=point.raw_fields,
            extras=point.extras,
            value=point.value,
            z_score=score,
            window_filled=idx >= window,
        )
        for idx, (point, score) in enumerate(zip(points, scores, strict=True))
    ]
