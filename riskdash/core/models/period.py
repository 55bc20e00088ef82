"""Display period tokens."""

from enum import Enum


class Period(str, Enum):
    """Requested display range for an indicator chart."""

    ONE_YEAR = "1y"
    TWO_YEARS = "2y"
    FIVE_YEARS = "5y"
    TEN_YEARS = "10y"
    MAX = "max"

    @property
    def years(self) -> int | None:
        """Length in years, ``None`` for ``max``."""
        if self is Period.MAX:
            return None
        return int(self.value.rstrip("y"))


__all__ = ["Period"]
