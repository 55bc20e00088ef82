"""Date alignment and forward-fill of independently sampled series."""

from bisect import bisect_right
from collections.abc import Mapping
from datetime import date

from riskdash.core.models import AlignedRecord, DateValueMap


class _ForwardFill:
    """As-of lookup over one sparse series."""

    def __init__(self, values: DateValueMap):
        self._dates = sorted(values)
        self._values = [values[d] for d in self._dates]

    def at(self, target: date) -> float | None:
        idx = bisect_right(self._dates, target)
        if idx == 0:
            return None
        return self._values[idx - 1]


def align_series(
    hard: Mapping[str, DateValueMap],
    soft: Mapping[str, DateValueMap] | None = None,
) -> list[AlignedRecord]:
    """Join series on shared dates.

    Dates kept are the intersection of all ``hard`` series. Each ``soft``
    series contributes its latest observation dated on or before the shared
    date; records with no such observation are dropped.

    Raises:
        ValueError: if no hard series is given
    """
    if not hard:
        raise ValueError("at least one hard series is required")

    shared: set[date] | None = None
    for values in hard.values():
        shared = set(values) if shared is None else shared & values.keys()
    assert shared is not None

    fills = {name: _ForwardFill(values) for name, values in (soft or {}).items()}

    records: list[AlignedRecord] = []
    for day in sorted(shared):
        inputs = {name: values[day] for name, values in hard.items()}
        for name, fill in fills.items():
            filled = fill.at(day)
            if filled is None:
                break
            inputs[name] = filled
        else:
            records.append(AlignedRecord(date=day, inputs=inputs))
    return records
