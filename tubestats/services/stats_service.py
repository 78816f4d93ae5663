"""Small numeric helpers: min-max normalization, median and mean."""

from collections.abc import Sequence

NORMALIZED_CONSTANT = 0.5


def min_max_normalize(values: Sequence[float]) -> list[float]:
    """Scale values into [0, 1]. A constant series maps to 0.5 everywhere."""
    if not values:
        return []
    lo = min(values)
    hi = max(values)
    if lo == hi:
        return [NORMALIZED_CONSTANT] * len(values)
    span = hi - lo
    return [(v - lo) / span for v in values]


def median(values: Sequence[float]) -> float:
    """Median of values, 0 for an empty sequence."""
    if not values:
        return 0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)
