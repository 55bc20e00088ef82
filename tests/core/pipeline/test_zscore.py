"""Tests for the causal rolling z-score engine."""

from datetime import date, timedelta

import numpy as np
import pytest

from riskdash.core.models import IndicatorPoint
from riskdash.core.pipeline.zscore import rolling_zscores, score_points


def test_population_standard_deviation_is_used() -> None:
    scores = rolling_zscores([1, 2, 3, 4, 5, 7], window=5)

    # mean 3, population std sqrt(2)
    assert scores[5] == pytest.approx(4 / np.sqrt(2), abs=1e-9)
    assert round(scores[5], 2) == 2.83


def test_first_window_positions_score_zero() -> None:
    values = [10.0, 50.0, -3.0, 8.0, 99.0, 1.0, 2.0]

    scores = rolling_zscores(values, window=4)

    assert scores[:4] == [0.0, 0.0, 0.0, 0.0]
    assert any(score != 0.0 for score in scores[4:])


def test_series_no_longer_than_window_is_all_zero() -> None:
    assert rolling_zscores([1.0, 2.0, 3.0], window=3) == [0.0, 0.0, 0.0]
    assert rolling_zscores([], window=3) == []


def test_scores_are_causal() -> None:
    rng = np.random.default_rng(7)
    base = rng.normal(size=60).tolist()
    altered = base[:40] + (np.array(base[40:]) * 50 + 1000).tolist()

    original_scores = rolling_zscores(base, window=10)
    altered_scores = rolling_zscores(altered, window=10)

    assert altered_scores[:40] == original_scores[:40]


def test_scores_are_deterministic() -> None:
    values = [0.5 * i + (i % 3) for i in range(80)]

    assert rolling_zscores(values, window=20) == rolling_zscores(values, window=20)


def test_zero_variance_window_scores_zero() -> None:
    values = [4.0] * 10 + [9.0, 4.0]

    scores = rolling_zscores(values, window=10)

    assert scores[10] == 0.0
    assert all(np.isfinite(scores))


def test_near_constant_large_values_are_treated_as_zero_variance() -> None:
    values = [1e6] * 5 + [1e6 + 1e-9] + [2e6]

    scores = rolling_zscores(values, window=5)

    assert scores[5] == 0.0
    assert scores[6] == 0.0
    assert all(np.isfinite(scores))


def test_window_below_one_is_rejected() -> None:
    with pytest.raises(ValueError):
        rolling_zscores([1.0, 2.0], window=0)


def test_score_points_flags_filled_windows() -> None:
    start = date(2024, 1, 1)
    points = [
        IndicatorPoint(date=start + timedelta(days=i), raw_fields={"x": float(i)}, value=float(i))
        for i in range(6)
    ]

    scored = score_points(points, window=3)

    assert [p.window_filled for p in scored] == [False, False, False, True, True, True]
    assert scored[0].z_score == 0.0
    assert scored[3].raw_fields == {"x": 3.0}
    assert scored[3].z_score == pytest.approx((3 - 1) / np.std([0, 1, 2]))
