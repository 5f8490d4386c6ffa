"""
goals/completion.py

Invert a fitted trend line to find when it reaches a goal's target.

All estimators return ``None`` rather than raising when the target is
unreachable: not enough samples, a flat trend, a target already behind
the reference point, or a target more than two years out.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Union

from goals.dates import DateLike, day_offset, format_day, shift_days, to_datetime
from goals.models import RegressionResult, Sample, WeightedRegressionResult

MAX_HORIZON_DAYS: int = 730

AnyRegression = Union[RegressionResult, WeightedRegressionResult]


def _target_offsets(
    data: Sequence[Sample],
    regression: AnyRegression,
    target_value: float,
    reference: Optional[DateLike],
) -> Optional[tuple[float, float]]:
    """
    Return ``(target_x, reference_x)`` on the day axis of *data*, or
    ``None`` when the target is not reachable within the horizon.
    """

    if len(data) < 2 or regression.slope == 0:
        return None

    base = to_datetime(data[0].date)
    reference_x = day_offset(reference if reference is not None else data[-1].date, base)
    target_x = (target_value - regression.intercept) / regression.slope

    if target_x <= reference_x:
        return None
    if target_x - reference_x > MAX_HORIZON_DAYS:
        return None
    return target_x, reference_x


def estimate_completion_date(
    data: Sequence[Sample],
    regression: RegressionResult,
    target_value: float,
) -> Optional[str]:
    """
    Date (``YYYY-MM-DD``) on which the trend line reaches *target_value*,
    counted after the last sample.
    """

    offsets = _target_offsets(data, regression, target_value, None)
    if offsets is None:
        return None
    return format_day(shift_days(to_datetime(data[0].date), offsets[0]))


def weighted_estimate_completion_date(
    data: Sequence[Sample],
    regression: WeightedRegressionResult,
    target_value: float,
) -> Optional[str]:
    """Weighted counterpart of :func:`estimate_completion_date`."""
    offsets = _target_offsets(data, regression, target_value, None)
    if offsets is None:
        return None
    return format_day(shift_days(to_datetime(data[0].date), offsets[0]))


def days_to_target(
    data: Sequence[Sample],
    regression: RegressionResult,
    target_value: float,
    from_date: Optional[DateLike] = None,
) -> Optional[int]:
    """
    Whole days (rounded up) until the trend reaches *target_value*.

    Counts from the last sample by default; pass *from_date* (e.g. today)
    to count from another point.
    """

    offsets = _target_offsets(data, regression, target_value, from_date)
    if offsets is None:
        return None
    target_x, reference_x = offsets
    return math.ceil(target_x - reference_x)


def weighted_days_to_target(
    data: Sequence[Sample],
    regression: WeightedRegressionResult,
    target_value: float,
    from_date: Optional[DateLike] = None,
) -> Optional[int]:
    offsets = _target_offsets(data, regression, target_value, from_date)
    if offsets is None:
        return None
    target_x, reference_x = offsets
    return math.ceil(target_x - reference_x)
