"""Numeric helpers shared by the calculation engine.

Every engine function routes its inputs through :func:`finite` so that NaN
or infinite values coming from stored records never reach an output.
"""

import math
from typing import Any, Iterable


def finite(value: Any) -> float:
    """Return ``value`` as a float, or 0.0 when it is missing or not finite."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def round_to(value: float, decimals: int = 2) -> float:
    """Round half up to ``decimals`` places.

    Halves go toward positive infinity (``0.125 -> 0.13``, ``-0.125 -> -0.12``)
    so results do not depend on banker's rounding.
    """
    safe_value = finite(value)
    factor = 10 ** max(0, int(decimals))
    scaled = safe_value * factor + 0.5
    if not math.isfinite(scaled):
        # Too large to carry decimals anyway
        return safe_value
    return math.floor(scaled) / factor


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 for a zero denominator."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for an empty input."""
    items = list(values)
    if not items:
        return 0.0
    return sum(items) / len(items)


def percentile(values: list[float], p: float) -> float:
    """Calculate a percentile with linear interpolation between order statistics.

    Args:
        values: Sample values (any order).
        p: Percentile as a fraction in [0, 1].

    Returns:
        The interpolated percentile, 0.0 for an empty sample.
    """
    if not values:
        return 0.0

    ranked = sorted(values)
    position = min(max((len(ranked) - 1) * p, 0), len(ranked) - 1)
    lower = math.floor(position)
    upper = math.ceil(position)
    if lower == upper:
        return ranked[lower]

    weight = position - lower
    return ranked[lower] * (1 - weight) + ranked[upper] * weight
