"""Period windowing: fetch range with warm-up, and display truncation."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

import pandas as pd

from riskdash.core.exceptions import UnsupportedPeriodError
from riskdash.core.models import Period, ScoredPoint


@dataclass(frozen=True)
class PeriodWindow:
    """Date range backing one period request."""

    fetch_start: date
    display_start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.display_start <= day <= self.end


def years_before(day: date, years: int) -> date:
    """Calendar year arithmetic; Feb 29 clamps to Feb 28."""
    return (pd.Timestamp(day) - pd.DateOffset(years=years)).date()


def resolve_window(
    period: Period,
    *,
    as_of: date,
    warmup_years: int,
    earliest: date | None,
    series_end: date | None = None,
) -> PeriodWindow:
    """Compute the fetch and display range for ``period`` ending at ``as_of``.

    Finite periods fetch ``warmup_years`` before the display start so the
    first displayed points are scored against a full window. ``max`` starts
    both ranges at the indicator's ``earliest`` date.
    """
    end = min(as_of, series_end) if series_end else as_of

    if period.years is None:
        if earliest is None:
            raise ValueError("period 'max' requires an earliest date")
        return PeriodWindow(fetch_start=earliest, display_start=earliest, end=end)

    display_start = years_before(end, period.years)
    fetch_start = years_before(display_start, warmup_years)
    return PeriodWindow(fetch_start=fetch_start, display_start=display_start, end=end)


def truncate(points: Iterable[ScoredPoint], window: PeriodWindow) -> list[ScoredPoint]:
    """Keep scored points inside the display range."""
    return [p for p in points if window.contains(p.date)]


def parse_period(token: str | Period, supported: Sequence[Period]) -> Period:
    """Validate a period token against an indicator's offered periods."""
    allowed = [p.value for p in supported]
    try:
        period = Period(token)
    except ValueError:
        raise UnsupportedPeriodError(str(token), allowed) from None
    if period not in supported:
        raise UnsupportedPeriodError(period.value, allowed)
    return period
