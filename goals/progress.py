"""
goals/progress.py

Progress toward a goal as an integer percentage.
"""

from __future__ import annotations

from typing import Optional

from goals.dates import round_half_up


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(value, max_value))


def compute_progress_percent(
    start_value: Optional[float],
    current_value: Optional[float],
    target_value: float,
) -> int:
    """
    Share of the distance from *start_value* to *target_value* covered by
    *current_value*, in ``[0, 100]``.

    Works for both decreasing goals (weight loss) and increasing goals
    (more steps).  Movement in the wrong direction reports 0 and
    overshooting the target reports 100.  Either value missing reports 0.
    """

    if start_value is None or current_value is None:
        return 0

    total_change = target_value - start_value
    if total_change == 0:
        return 100 if current_value == target_value else 0

    percent = (current_value - start_value) / total_change * 100
    return int(clamp(round_half_up(percent), 0, 100))
