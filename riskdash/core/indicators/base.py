"""Declarative indicator definitions."""

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum

from riskdash.core.models import Period
from riskdash.core.pipeline.transforms import Transform

ALL_PERIODS = (Period.ONE_YEAR, Period.TWO_YEARS, Period.FIVE_YEARS, Period.TEN_YEARS, Period.MAX)
FINITE_PERIODS = (Period.ONE_YEAR, Period.TWO_YEARS, Period.FIVE_YEARS, Period.TEN_YEARS)
SHORT_PERIODS = (Period.ONE_YEAR, Period.TWO_YEARS, Period.FIVE_YEARS, Period.MAX)


class InputRole(str, Enum):
    """How an input series takes part in date alignment."""

    HARD = "hard"  # must be observed on the shared date
    SOFT = "soft"  # forward-filled from its latest earlier observation
    EXACT = "exact"  # shown when observed on the shared date, never drops a record


@dataclass(frozen=True)
class InputSpec:
    """One source series feeding an indicator.

    ``name`` is the key the transform reads and the record field it is shown
    under. ``scale`` and ``decimals`` apply only to the displayed value; the
    transform always sees the source units.
    """

    name: str
    provider: str
    dataset: str
    source_field: str = "value"
    role: InputRole = InputRole.HARD
    scale: float = 1.0
    decimals: int = 2
    display: bool = True


@dataclass(frozen=True)
class ExtraSpec:
    """Derived value shown next to the indicator but not scored."""

    name: str
    transform: Transform
    decimals: int = 2


@dataclass(frozen=True)
class IndicatorSpec:
    """Everything needed to compute and serve one indicator."""

    name: str
    title: str
    inputs: tuple[InputSpec, ...]
    value_field: str
    transform: Transform
    extras: tuple[ExtraSpec, ...] = ()
    window: int = 252
    decimals: int = 2
    periods: tuple[Period, ...] = ALL_PERIODS
    default_period: Period = Period.TWO_YEARS
    earliest: date | None = None
    observations_per_year: int = 240
    series_end: date | None = None
    cache_ttl: int | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.inputs:
            raise ValueError(f"{self.name}: at least one input is required")
        if not any(i.role is InputRole.HARD for i in self.inputs):
            raise ValueError(f"{self.name}: at least one hard input is required")
        if self.window < 1:
            raise ValueError(f"{self.name}: window must be >= 1")
        if self.default_period not in self.periods:
            raise ValueError(f"{self.name}: default period {self.default_period.value} is not offered")
        if Period.MAX in self.periods and self.earliest is None:
            raise ValueError(f"{self.name}: period 'max' requires an earliest date")
        if self.observations_per_year < 1:
            raise ValueError(f"{self.name}: observations_per_year must be >= 1")
        for item in self.inputs:
            if item.role is InputRole.EXACT and not item.display:
                raise ValueError(f"{self.name}: exact-date input {item.name} must be displayed")

    @property
    def warmup_years(self) -> int:
        """Whole years fetched before the display start.

        Sized from a low estimate of ``observations_per_year`` so that holiday
        gaps still leave ``window`` points ahead of the first displayed date.
        """
        return math.ceil(self.window / self.observations_per_year)

    @property
    def zscore_field(self) -> str:
        return f"{self.value_field}ZScore"

    @property
    def sources(self) -> list[tuple[str, str]]:
        """Distinct ``(provider, dataset)`` pairs in declaration order."""
        seen: dict[tuple[str, str], None] = {}
        for spec in self.inputs:
            seen.setdefault((spec.provider, spec.dataset), None)
        return list(seen)

    def fields_for(self, provider: str, dataset: str) -> list[str]:
        """Source fields requested from one ``(provider, dataset)`` document."""
        fields: list[str] = []
        for spec in self.inputs:
            if (spec.provider, spec.dataset) == (provider, dataset) and spec.source_field not in fields:
                fields.append(spec.source_field)
        return fields

    def field_decimals(self) -> dict[str, int]:
        """Display precision for every record field."""
        decimals = {spec.name: spec.decimals for spec in self.inputs if spec.display}
        decimals.update({extra.name: extra.decimals for extra in self.extras})
        decimals[self.value_field] = self.decimals
        return decimals

    def describe(self) -> dict[str, object]:
        """Catalogue entry for listings."""
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "value_field": self.value_field,
            "zscore_field": self.zscore_field,
            "window": self.window,
            "periods": [p.value for p in self.periods],
            "default_period": self.default_period.value,
            "sources": [f"{provider}:{dataset}" for provider, dataset in self.sources],
        }
