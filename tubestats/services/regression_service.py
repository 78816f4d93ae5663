"""Ordinary least squares regression and R² interpretation.

Both variants fit y = slope * x + intercept:

    slope     = sum((x - x_mean) * (y - y_mean)) / sum((x - x_mean) ** 2)
    intercept = y_mean - slope * x_mean
    r_squared = 1 - SS_res / SS_tot

Degenerate inputs return defined values instead of NaN:
    fewer than 2 points      -> slope = intercept = r_squared = 0
    all y identical or SS_tot underflows to 0
                             -> r_squared = 1 (the flat line fits exactly)
    all x identical (xy fit) -> slope = 0, intercept = y_mean
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import NamedTuple

STRONG_THRESHOLD = 0.7
MODERATE_THRESHOLD = 0.4
WEAK_THRESHOLD = 0.2


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class RegressionResult:
    slope: float
    intercept: float
    r_squared: float
    line_endpoints: tuple[Point, Point] | None = None

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


_EMPTY = RegressionResult(slope=0.0, intercept=0.0, r_squared=0.0)


def _fit(xs: Sequence[float], ys: Sequence[float]) -> RegressionResult:
    n = len(xs)
    x_mean = sum(xs) / n
    y_mean = sum(ys) / n

    ss_tot = 0.0
    for y in ys:
        ss_tot += (y - y_mean) ** 2
    if ss_tot == 0.0 or min(ys) == max(ys):
        # the horizontal line through the points is exact
        return RegressionResult(slope=0.0, intercept=float(ys[0]), r_squared=1.0)

    numerator = 0.0
    denominator = 0.0
    for x, y in zip(xs, ys):
        numerator += (x - x_mean) * (y - y_mean)
        denominator += (x - x_mean) ** 2
    if denominator == 0.0 or min(xs) == max(xs):
        slope = 0.0
    else:
        slope = numerator / denominator
    intercept = y_mean - slope * x_mean

    ss_res = 0.0
    for x, y in zip(xs, ys):
        ss_res += (y - (slope * x + intercept)) ** 2

    return RegressionResult(slope=slope, intercept=intercept, r_squared=1 - ss_res / ss_tot)


def simple_linear_regression(ys: Sequence[float]) -> RegressionResult:
    """Fit ys against their index positions 0, 1, 2, ..."""
    if len(ys) < 2:
        return _EMPTY
    return _fit(range(len(ys)), ys)


def simple_linear_regression_xy(points: Sequence[tuple[float, float]]) -> RegressionResult:
    """Fit explicit (x, y) points and include trend line endpoints at min/max x."""
    if len(points) < 2:
        return _EMPTY

    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    fit = _fit(xs, ys)

    lo = min(xs)
    hi = max(xs)
    return RegressionResult(
        slope=fit.slope,
        intercept=fit.intercept,
        r_squared=fit.r_squared,
        line_endpoints=(Point(lo, fit.predict(lo)), Point(hi, fit.predict(hi))),
    )


def interpret_correlation(r_squared: float) -> str:
    """Human label for how well a fit explains the data."""
    if r_squared > STRONG_THRESHOLD:
        return "Strong correlation"
    if r_squared > MODERATE_THRESHOLD:
        return "Moderate correlation"
    if r_squared > WEAK_THRESHOLD:
        return "Weak correlation"
    return "Very weak or no correlation"


def interpret_trend(r_squared: float, slope: float) -> str:
    """Strength and direction of a time trend, e.g. ``"Moderate increase"``."""
    if r_squared > STRONG_THRESHOLD:
        strength = "Strong"
    elif r_squared > MODERATE_THRESHOLD:
        strength = "Moderate"
    else:
        strength = "Weak"
    direction = "increase" if slope > 0 else "decrease"
    return f"{strength} {direction}"
