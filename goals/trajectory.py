"""
goals/trajectory.py

Idealised straight-line path from a goal's start value to its target.
"""

from __future__ import annotations

import math

from goals.dates import SECONDS_PER_DAY, format_day, round_half_up, shift_days, to_datetime
from goals.models import TrajectoryPoint
from goals.schema import Goal

DEFAULT_TRAJECTORY_POINTS: int = 50
DEFAULT_TRAJECTORY_DAYS: int = 90


def compute_goal_trajectory(
    goal: Goal,
    num_points: int = DEFAULT_TRAJECTORY_POINTS,
) -> list[TrajectoryPoint]:
    """
    Interpolate ``num_points + 1`` evenly spaced points between the goal's
    start and its target.

    The end date is resolved in order:

    1. ``goal.target_date`` when set;
    2. ``start_date + ceil(|target - start| / rate * 7)`` days when a
       positive weekly ``rate`` is set;
    3. ``start_date + 90`` days.

    Returns an empty list when the end date is not after the start date.
    """

    if num_points < 1:
        return []

    start_value = goal.start_value if goal.start_value is not None else goal.target_value
    start = to_datetime(goal.start_date)

    if goal.target_date is not None:
        end = to_datetime(goal.target_date)
    elif goal.has_rate():
        weeks_needed = abs(goal.target_value - start_value) / goal.rate
        end = shift_days(start, math.ceil(weeks_needed * 7))
    else:
        end = shift_days(start, DEFAULT_TRAJECTORY_DAYS)

    total_days = (end - start).total_seconds() / SECONDS_PER_DAY
    if total_days <= 0:
        return []

    points: list[TrajectoryPoint] = []
    for i in range(num_points + 1):
        frac = i / num_points
        value = start_value + (goal.target_value - start_value) * frac
        points.append(
            TrajectoryPoint(
                date=format_day(shift_days(start, frac * total_days)),
                value=round_half_up(value, 1),
            )
        )
    return points
