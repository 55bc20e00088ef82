"""Indicator transforms.

Each factory returns a callable mapping one aligned record's inputs to the
indicator value, or ``None`` when the record must be dropped (for example a
non-positive denominator).
"""

from collections.abc import Callable, Mapping

Transform = Callable[[Mapping[str, float]], float | None]


def difference(a: str, b: str, scale: float = 1.0) -> Transform:
    """``(b - a) * scale``; a scale of 100 turns percentage points into bps."""

    def _apply(inputs: Mapping[str, float]) -> float | None:
        return (inputs[b] - inputs[a]) * scale

    return _apply


def ratio(numerator: str, denominator: str) -> Transform:
    def _apply(inputs: Mapping[str, float]) -> float | None:
        bottom = inputs[denominator]
        if bottom <= 0:
            return None
        return inputs[numerator] / bottom

    return _apply


def percent_of(part: str, whole: str) -> Transform:
    def _apply(inputs: Mapping[str, float]) -> float | None:
        bottom = inputs[whole]
        if bottom <= 0:
            return None
        return 100.0 * inputs[part] / bottom

    return _apply


def scaled(field: str, scale: float = 1.0) -> Transform:
    def _apply(inputs: Mapping[str, float]) -> float | None:
        return inputs[field] * scale

    return _apply


def earnings_yield_gap(eps: str, price: str, real_yield: str) -> Transform:
    """Earnings yield (``100 * eps / price``) minus the real yield."""
    earnings_yield = percent_of(eps, price)

    def _apply(inputs: Mapping[str, float]) -> float | None:
        ey = earnings_yield(inputs)
        if ey is None:
            return None
        return ey - inputs[real_yield]

    return _apply


__all__ = [
    "Transform",
    "difference",
    "earnings_yield_gap",
    "percent_of",
    "ratio",
    "scaled",
]
