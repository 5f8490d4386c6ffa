"""
goals/projection.py

Forward projections of a goal metric with a widening confidence band.

Regression projections extend a fitted line from the last sample (or an
explicit start date) and use a prediction-interval half-width:

    half_width = k * se * sqrt(1 + 1/n + (x - x̄)² / Σ(x - x̄)²)

The rate-based projection is the fallback when there is not enough
history to fit a line; it walks the goal's declared weekly rate from
today with a band that grows by 2 % of the start value every 30 days.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional, Sequence

from goals.dates import (
    DateLike,
    SECONDS_PER_DAY,
    day_offset,
    format_day,
    round_half_up,
    shift_days,
    to_datetime,
)
from goals.models import (
    ProjectionPoint,
    RegressionResult,
    Sample,
    WeightedRegressionResult,
)
from goals.schema import Goal

DEFAULT_FUTURE_DAYS: int = 60
DEFAULT_CONFIDENCE_MULTIPLIER: float = 1.96
MAX_PROJECTION_POINTS: int = 120

# Standard-error floor, so a perfect two-point fit still draws a band.
SE_FLOOR_RANGE_FRACTION: float = 0.15
SE_FLOOR_MEAN_FRACTION: float = 0.02
SE_FLOOR_ABSOLUTE: float = 0.5

RATE_FUTURE_DAYS: int = 90
RATE_NUM_POINTS: int = 50
RATE_DEFAULT_TRAJECTORY_DAYS: int = 90
RATE_SPREAD_FRACTION: float = 0.02
RATE_SPREAD_PERIOD_DAYS: float = 30.0
MAX_HORIZON_DAYS: int = 730


def _effective_standard_error(data: Sequence[Sample], standard_error: float) -> float:
    values = [float(sample.value) for sample in data]
    value_range = max(values) - min(values)
    mean_value = sum(values) / len(values)
    floor = max(
        value_range * SE_FLOOR_RANGE_FRACTION,
        abs(mean_value) * SE_FLOOR_MEAN_FRACTION,
        SE_FLOOR_ABSOLUTE,
    )
    return max(standard_error, floor)


def _project_line(
    data: Sequence[Sample],
    *,
    slope: float,
    intercept: float,
    standard_error: float,
    n: float,
    x_mean: float,
    sum_squared_x: float,
    future_days: int,
    confidence_multiplier: float,
    projection_start_date: Optional[DateLike],
) -> list[ProjectionPoint]:
    if len(data) < 2 or future_days <= 0:
        return []

    base = to_datetime(data[0].date)
    start = projection_start_date if projection_start_date is not None else data[-1].date
    start_x = day_offset(start, base)

    effective_se = _effective_standard_error(data, standard_error)
    num_points = int(min(future_days, MAX_PROJECTION_POINTS))

    points: list[ProjectionPoint] = []
    for i in range(num_points + 1):
        x = start_x + (i / num_points) * future_days
        predicted = slope * x + intercept

        leverage = (x - x_mean) ** 2 / sum_squared_x if sum_squared_x > 0 else 0.0
        interval = confidence_multiplier * effective_se * math.sqrt(1 + 1 / n + leverage)

        points.append(
            ProjectionPoint(
                date=format_day(shift_days(base, x)),
                predicted=round_half_up(predicted, 1),
                upper=round_half_up(predicted + interval, 1),
                lower=round_half_up(predicted - interval, 1),
            )
        )
    return points


def compute_projection(
    data: Sequence[Sample],
    regression: RegressionResult,
    future_days: int = DEFAULT_FUTURE_DAYS,
    confidence_multiplier: float = DEFAULT_CONFIDENCE_MULTIPLIER,
    projection_start_date: Optional[DateLike] = None,
) -> list[ProjectionPoint]:
    """
    Project an ordinary regression *future_days* forward.

    Parameters
    ----------
    data:
        Historical samples the regression was fitted on, oldest first.
    regression:
        Result of :func:`goals.regression.linear_regression` for *data*.
    future_days:
        Days to project past the projection start.  At most 120 steps are
        emitted, so the output holds ``min(future_days, 120) + 1`` points.
    confidence_multiplier:
        Band multiplier; 1.96 approximates a 95 % interval.
    projection_start_date:
        Where the projection begins (e.g. today).  Defaults to the last
        sample's date.
    """

    return _project_line(
        data,
        slope=regression.slope,
        intercept=regression.intercept,
        standard_error=regression.standard_error,
        n=regression.n,
        x_mean=regression.x_mean,
        sum_squared_x=regression.sum_squared_x,
        future_days=future_days,
        confidence_multiplier=confidence_multiplier,
        projection_start_date=projection_start_date,
    )


def compute_weighted_projection(
    data: Sequence[Sample],
    regression: WeightedRegressionResult,
    future_days: int = DEFAULT_FUTURE_DAYS,
    confidence_multiplier: float = DEFAULT_CONFIDENCE_MULTIPLIER,
    projection_start_date: Optional[DateLike] = None,
) -> list[ProjectionPoint]:
    """
    Same as :func:`compute_projection`, using the effective sample size and
    weighted x statistics of a :class:`WeightedRegressionResult`.
    """

    return _project_line(
        data,
        slope=regression.slope,
        intercept=regression.intercept,
        standard_error=regression.standard_error,
        n=regression.n_effective,
        x_mean=regression.x_mean_weighted,
        sum_squared_x=regression.sum_weighted_squared_x,
        future_days=future_days,
        confidence_multiplier=confidence_multiplier,
        projection_start_date=projection_start_date,
    )


def _daily_rate(goal: Goal, start_value: float) -> float:
    if goal.has_rate():
        daily = goal.rate / 7
        return -daily if goal.target_value < start_value else daily

    # No declared rate: slope of the goal's own trajectory.
    goal_start = goal.start_value if goal.start_value is not None else goal.target_value
    total_change = goal.target_value - goal_start
    if goal.target_date is not None:
        trajectory_days = (
            to_datetime(goal.target_date) - to_datetime(goal.start_date)
        ).total_seconds() / SECONDS_PER_DAY
    else:
        trajectory_days = RATE_DEFAULT_TRAJECTORY_DAYS
    return total_change / trajectory_days if trajectory_days > 0 else 0.0


def compute_rate_based_projection(
    goal: Goal,
    current_value: Optional[float],
    future_days: int = RATE_FUTURE_DAYS,
    num_points: int = RATE_NUM_POINTS,
    *,
    today: Optional[DateLike] = None,
) -> list[ProjectionPoint]:
    """
    Project from today using the goal's declared rate.

    The projection starts at *current_value* (falling back to the goal's
    start value, then its target) and ends when the target is reached, at
    *future_days*, or at two years, whichever comes first.

    Returns an empty list when the resolved daily rate is zero.
    """

    if num_points < 1:
        return []

    if current_value is not None:
        start_value = float(current_value)
    elif goal.start_value is not None:
        start_value = goal.start_value
    else:
        start_value = goal.target_value

    daily_rate = _daily_rate(goal, start_value)
    if daily_rate == 0:
        return []

    remaining = goal.target_value - start_value
    days_needed = abs(remaining / daily_rate)
    horizon = min(math.ceil(days_needed), future_days, MAX_HORIZON_DAYS)

    base = to_datetime(today if today is not None else date.today())
    spread_per_day = abs(start_value) * RATE_SPREAD_FRACTION / RATE_SPREAD_PERIOD_DAYS

    points: list[ProjectionPoint] = []
    for i in range(num_points + 1):
        offset = (i / num_points) * horizon
        predicted = start_value + daily_rate * offset
        spread = spread_per_day * offset
        points.append(
            ProjectionPoint(
                date=format_day(shift_days(base, offset)),
                predicted=round_half_up(predicted, 1),
                upper=round_half_up(predicted + spread, 1),
                lower=round_half_up(predicted - spread, 1),
            )
        )
    return points
