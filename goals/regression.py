"""
goals/regression.py

Ordinary and recency-weighted least-squares fits over dated samples.
Plain Python only; no I/O, no logging, no side effects.

The x axis is fractional days since the first sample's date:

    x_i = (date_i - date_0) / 1 day

Ordinary fit:

    m = (Σxy - ΣxΣy / n) / (Σx² - (Σx)² / n)
    b = ȳ - m * x̄

Weighted fit, with w_i = exp(-ln 2 / half_life * age_i) and age_i the
number of days before the most recent sample:

    m = Σw(x - x̄w)(y - ȳw) / Σw(x - x̄w)²
    b = ȳw - m * x̄w
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from goals.dates import day_offset, to_datetime
from goals.models import RegressionResult, Sample, WeightedRegressionResult

DEFAULT_HALF_LIFE_DAYS: float = 14.0

# Minimum number of samples required for any fit.
MIN_POINTS: int = 2


def _xy(data: Sequence[Sample]) -> list[tuple[float, float]]:
    base = to_datetime(data[0].date)
    return [(day_offset(sample.date, base), float(sample.value)) for sample in data]


def linear_regression(data: Sequence[Sample]) -> Optional[RegressionResult]:
    """
    Fit ``value = slope * x + intercept`` by ordinary least squares.

    Returns ``None`` when fewer than two samples are supplied or every
    sample falls on the same day.
    """

    if len(data) < MIN_POINTS:
        return None

    points = _xy(data)
    n = len(points)

    sum_x = sum(x for x, _ in points)
    sum_y = sum(y for _, y in points)
    sum_xy = sum(x * y for x, y in points)
    sum_x2 = sum(x * x for x, _ in points)
    sum_y2 = sum(y * y for _, y in points)

    x_mean = sum_x / n
    y_mean = sum_y / n

    denom = sum_x2 - (sum_x * sum_x) / n
    if denom == 0:
        return None

    slope = (sum_xy - (sum_x * sum_y) / n) / denom
    intercept = y_mean - slope * x_mean

    ss_res = sum((y - (slope * x + intercept)) ** 2 for x, y in points)
    ss_tot = sum_y2 - (sum_y * sum_y) / n
    r2 = 1.0 if ss_tot == 0 else 1.0 - ss_res / ss_tot

    standard_error = math.sqrt(ss_res / (n - 2)) if n > 2 else 0.0
    sum_squared_x = sum((x - x_mean) ** 2 for x, _ in points)

    return RegressionResult(
        slope=slope,
        intercept=intercept,
        r2=r2,
        standard_error=standard_error,
        n=n,
        x_mean=x_mean,
        sum_squared_x=sum_squared_x,
    )


def weighted_linear_regression(
    data: Sequence[Sample],
    half_life_days: float = DEFAULT_HALF_LIFE_DAYS,
) -> Optional[WeightedRegressionResult]:
    """
    Fit a line with exponentially decaying weights on older samples.

    A sample *half_life_days* older than the most recent one carries half
    of its weight.  *half_life_days* must be positive.

    Returns ``None`` when fewer than two samples are supplied, when the
    effective sample size drops below two, or when the weighted x
    variance is zero.
    """

    if len(data) < MIN_POINTS:
        return None

    decay = math.log(2) / half_life_days
    base = to_datetime(data[0].date)
    last_x = day_offset(data[-1].date, base)

    points: list[tuple[float, float, float]] = []
    for sample in data:
        x = day_offset(sample.date, base)
        age = last_x - x
        points.append((x, float(sample.value), math.exp(-decay * age)))

    total_w = sum(w for _, _, w in points)
    total_w2 = sum(w * w for _, _, w in points)
    n_effective = (total_w * total_w) / total_w2
    if n_effective < MIN_POINTS:
        return None

    x_mean_w = sum(w * x for x, _, w in points) / total_w
    y_mean_w = sum(w * y for _, y, w in points) / total_w

    sum_wxx = sum(w * (x - x_mean_w) ** 2 for x, _, w in points)
    if sum_wxx == 0:
        return None

    sum_wxy = sum(w * (x - x_mean_w) * (y - y_mean_w) for x, y, w in points)

    slope = sum_wxy / sum_wxx
    intercept = y_mean_w - slope * x_mean_w

    ss_res = sum(w * (y - (slope * x + intercept)) ** 2 for x, y, w in points)
    standard_error = math.sqrt(ss_res / (n_effective - 2)) if n_effective > 2 else 0.0

    return WeightedRegressionResult(
        slope=slope,
        intercept=intercept,
        standard_error=standard_error,
        n_effective=n_effective,
        x_mean_weighted=x_mean_w,
        sum_weighted_squared_x=sum_wxx,
    )
