"""
goals package exports: the goal trajectory and trend-projection functions.

Storage-backed pieces (``goals.repository``, ``goals.orchestrator``) pull
in SQLAlchemy and are imported from their modules directly.
"""

from goals.analysis import GoalAnalysis, analyze_goal
from goals.completion import (
    days_to_target,
    estimate_completion_date,
    weighted_days_to_target,
    weighted_estimate_completion_date,
)
from goals.models import (
    ProjectionPoint,
    RegressionResult,
    Sample,
    TrajectoryPoint,
    WeightedRegressionResult,
)
from goals.progress import compute_progress_percent
from goals.projection import (
    compute_projection,
    compute_rate_based_projection,
    compute_weighted_projection,
)
from goals.regression import linear_regression, weighted_linear_regression
from goals.schema import Goal
from goals.trajectory import compute_goal_trajectory

__all__ = [
    "Goal",
    "GoalAnalysis",
    "ProjectionPoint",
    "RegressionResult",
    "Sample",
    "TrajectoryPoint",
    "WeightedRegressionResult",
    "analyze_goal",
    "compute_goal_trajectory",
    "compute_progress_percent",
    "compute_projection",
    "compute_rate_based_projection",
    "compute_weighted_projection",
    "days_to_target",
    "estimate_completion_date",
    "linear_regression",
    "weighted_days_to_target",
    "weighted_estimate_completion_date",
    "weighted_linear_regression",
]
