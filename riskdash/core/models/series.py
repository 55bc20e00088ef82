"""Series data models flowing through the normalization pipeline."""

from collections.abc import Mapping
import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .period import Period

DateValueMap = dict[dt.date, float]
"""Date-keyed scalar observations returned by every adapter."""

ZSCORE_DECIMALS = 2


class AlignedRecord(BaseModel):
    """Inputs of every required series on a shared date."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    inputs: dict[str, float]


class IndicatorPoint(BaseModel):
    """Aligned inputs (in display units) plus the derived indicator value."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    raw_fields: dict[str, float | None] = Field(default_factory=dict)
    extras: dict[str, float] = Field(default_factory=dict)
    value: float


class ScoredPoint(IndicatorPoint):
    """Indicator point with its causal rolling z-score.

    ``z_score`` is ``0.0`` during warm-up; ``window_filled`` tells a warm-up
    zero apart from a genuine reading at the mean.
    """

    z_score: float = 0.0
    window_filled: bool = False


def round_value(value: float, decimals: int) -> float | int:
    """Round for display, folding ``-0.0`` into ``0``."""
    if decimals <= 0:
        return int(round(value)) + 0
    return round(value, decimals) + 0.0


class IndicatorSeries(BaseModel):
    """Scored, display-truncated indicator history."""

    indicator: str
    period: Period
    value_field: str
    window_size: int
    display_start: dt.date
    display_end: dt.date
    points: list[ScoredPoint] = Field(default_factory=list)
    dropped_records: int = 0
    decimals: dict[str, int] = Field(default_factory=dict)

    @property
    def zscore_field(self) -> str:
        return f"{self.value_field}ZScore"

    @property
    def latest(self) -> ScoredPoint | None:
        return self.points[-1] if self.points else None

    def __len__(self) -> int:
        return len(self.points)

    def to_record(self, point: ScoredPoint) -> dict[str, Any]:
        """Serialize one point into the uniform chart record shape."""
        record: dict[str, Any] = {"date": point.date.isoformat()}
        for name, value in _chain(point.raw_fields, point.extras):
            record[name] = None if value is None else round_value(value, self.decimals.get(name, 2))
        record[self.value_field] = round_value(point.value, self.decimals.get(self.value_field, 2))
        record[self.zscore_field] = round_value(point.z_score, ZSCORE_DECIMALS)
        return record

    def to_records(self) -> list[dict[str, Any]]:
        """Serialize all points, ascending by date."""
        return [self.to_record(point) for point in self.points]


def _chain(*mappings: Mapping[str, float | None]):
    for mapping in mappings:
        yield from mapping.items()


__all__ = [
    "AlignedRecord",
    "DateValueMap",
    "IndicatorPoint",
    "IndicatorSeries",
    "ScoredPoint",
    "ZSCORE_DECIMALS",
    "round_value",
]
