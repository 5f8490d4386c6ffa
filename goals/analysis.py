"""
goals/analysis.py

Combines the goal math into one chart-ready analysis of a single goal:
ideal trajectory, projected trend with confidence band, estimated
completion date and progress percentage.

Pure: the caller supplies the goal, its history and the current value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Sequence

from goals.completion import weighted_days_to_target, weighted_estimate_completion_date
from goals.dates import SECONDS_PER_DAY, DateLike, parse_day, to_datetime
from goals.models import ProjectionPoint, Sample, TrajectoryPoint
from goals.progress import compute_progress_percent
from goals.projection import (
    DEFAULT_CONFIDENCE_MULTIPLIER,
    compute_rate_based_projection,
    compute_weighted_projection,
)
from goals.regression import DEFAULT_HALF_LIFE_DAYS, weighted_linear_regression
from goals.schema import Goal
from goals.trajectory import DEFAULT_TRAJECTORY_DAYS, compute_goal_trajectory

METHOD_WEIGHTED = "weighted_regression"
METHOD_RATE = "rate_based"
METHOD_NONE = "none"


@dataclass(frozen=True)
class GoalAnalysis:
    """
    Everything the goal detail view draws for one goal.

    ``method`` names the source of ``projection``:
    ``"weighted_regression"``, ``"rate_based"`` or ``"none"``.
    """

    history: list[Sample] = field(default_factory=list)
    trajectory: list[TrajectoryPoint] = field(default_factory=list)
    projection: list[ProjectionPoint] = field(default_factory=list)
    method: str = METHOD_NONE
    current_value: Optional[float] = None
    estimated_completion_date: Optional[str] = None
    """Date the weighted trend reaches the target, if it does within two years."""

    projected_end_date: Optional[str] = None
    """Right edge of the chart: estimate, projection end, or trajectory end."""

    progress_percent: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "history": [sample.to_dict() for sample in self.history],
            "trajectory": [point.to_dict() for point in self.trajectory],
            "projection": [point.to_dict() for point in self.projection],
            "method": self.method,
            "current_value": self.current_value,
            "estimated_completion_date": self.estimated_completion_date,
            "projected_end_date": self.projected_end_date,
            "progress_percent": self.progress_percent,
        }


def _trajectory_span_days(trajectory: Sequence[TrajectoryPoint]) -> Optional[int]:
    if not trajectory:
        return None
    span = to_datetime(trajectory[-1].date) - to_datetime(trajectory[0].date)
    return math.ceil(span.total_seconds() / SECONDS_PER_DAY)


def analyze_goal(
    goal: Goal,
    history: Sequence[Sample],
    current_value: Optional[float] = None,
    *,
    today: Optional[DateLike] = None,
    half_life_days: float = DEFAULT_HALF_LIFE_DAYS,
    confidence_multiplier: float = DEFAULT_CONFIDENCE_MULTIPLIER,
    fallback_days: int = DEFAULT_TRAJECTORY_DAYS,
) -> GoalAnalysis:
    """
    Build the full analysis for *goal*.

    Samples dated before ``goal.start_date`` are ignored.  With at least
    two usable samples the recency-weighted trend is projected from
    *today* until it reaches the target (or across the trajectory span
    when it never does).  Otherwise the goal's declared rate drives a
    rate-based projection.

    Parameters
    ----------
    goal:
        Goal descriptor.
    history:
        Samples of the goal metric, oldest first.
    current_value:
        Latest known value.  Defaults to the last usable sample's value.
    today:
        Reference date for projections; defaults to the current date.
    fallback_days:
        Projection length when neither the trend nor the trajectory gives
        one, and the horizon of the rate-based projection.
    """

    today_value: DateLike = today if today is not None else date.today()
    start_day = parse_day(goal.start_date)
    samples = [sample for sample in history if sample.date >= start_day]

    if current_value is None and samples:
        current_value = samples[-1].value

    trajectory = compute_goal_trajectory(goal)

    projection: list[ProjectionPoint] = []
    method = METHOD_NONE
    estimated: Optional[str] = None
    end_date: Optional[str] = None

    if len(samples) >= 2:
        regression = weighted_linear_regression(samples, half_life_days)
        if regression is not None:
            future_days = weighted_days_to_target(
                samples, regression, goal.target_value, today_value
            )
            if future_days is None:
                future_days = _trajectory_span_days(trajectory)
            if future_days is None:
                future_days = fallback_days

            weighted = compute_weighted_projection(
                samples, regression, future_days, confidence_multiplier, today_value
            )
            if len(weighted) >= 2:
                projection = weighted
                method = METHOD_WEIGHTED

            estimated = weighted_estimate_completion_date(samples, regression, goal.target_value)
            end_date = estimated
            if end_date is None and weighted:
                end_date = weighted[-1].date

    if method == METHOD_NONE:
        fallback = compute_rate_based_projection(
            goal, current_value, fallback_days, today=today_value
        )
        if fallback:
            projection = fallback
            method = METHOD_RATE
            end_date = fallback[-1].date

    if end_date is None and trajectory:
        end_date = trajectory[-1].date

    return GoalAnalysis(
        history=samples,
        trajectory=trajectory,
        projection=projection,
        method=method,
        current_value=current_value,
        estimated_completion_date=estimated,
        projected_end_date=end_date,
        progress_percent=compute_progress_percent(
            goal.start_value, current_value, goal.target_value
        ),
    )
