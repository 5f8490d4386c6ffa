"""
tests/test_goal_analysis.py

Tests for analyze_goal: projection source selection and end-date fallbacks.
"""

from __future__ import annotations

from datetime import date

import pytest

from goals.analysis import GoalAnalysis, analyze_goal
from goals.models import Sample

TODAY = date(2025, 1, 6)


class TestAnalyzeGoal:
    def test_weighted_trend_is_preferred(self, make_goal, make_samples) -> None:
        history = make_samples("2025-01-01", [200, 199, 198, 197, 196, 195])

        analysis = analyze_goal(make_goal(), history, today=TODAY)

        assert analysis.method == "weighted_regression"
        assert analysis.estimated_completion_date == "2025-01-21"
        assert analysis.projected_end_date == "2025-01-21"
        assert analysis.projection[0].date == "2025-01-06"
        assert analysis.projection[0].predicted == pytest.approx(195.0)
        assert len(analysis.trajectory) == 51

    def test_current_value_defaults_to_latest_sample(self, make_goal, make_samples) -> None:
        history = make_samples("2025-01-01", [200, 199, 198, 197, 196, 195])

        analysis = analyze_goal(make_goal(), history, today=TODAY)

        assert analysis.current_value == 195
        assert analysis.progress_percent == 25

    def test_explicit_current_value_wins(self, make_goal, make_samples) -> None:
        history = make_samples("2025-01-01", [200, 199, 198, 197, 196, 195])
        analysis = analyze_goal(make_goal(), history, 190, today=TODAY)

        assert analysis.current_value == 190
        assert analysis.progress_percent == 50

    def test_history_before_start_is_ignored(self, make_goal, make_samples) -> None:
        history = [
            Sample(date(2024, 12, 15), 250.0),
            *make_samples("2025-01-01", [200, 199, 198, 197, 196, 195]),
        ]

        analysis = analyze_goal(make_goal(), history, today=TODAY)

        assert len(analysis.history) == 6
        assert analysis.history[0].date == date(2025, 1, 1)
        assert analysis.estimated_completion_date == "2025-01-21"

    def test_wrong_direction_projects_over_trajectory_span(self, make_goal, make_samples) -> None:
        history = make_samples("2025-01-01", [200, 201, 202, 203, 204, 205])

        analysis = analyze_goal(make_goal(), history, today=TODAY)

        assert analysis.method == "weighted_regression"
        assert analysis.estimated_completion_date is None
        # Trajectory spans 2025-01-01 .. 2025-07-01 = 181 days from today.
        assert analysis.projection[-1].date == "2025-07-06"
        assert analysis.projected_end_date == "2025-07-06"
        assert analysis.progress_percent == 0

    def test_single_sample_falls_back_to_rate(self, make_goal) -> None:
        goal = make_goal(rate=7, target_date=None)
        history = [Sample(date(2025, 1, 2), 198.0)]

        analysis = analyze_goal(goal, history, today=TODAY)

        assert analysis.method == "rate_based"
        assert analysis.estimated_completion_date is None
        assert analysis.projection[0].predicted == pytest.approx(198.0)
        # 18 lbs to go at 1 lb/day.
        assert analysis.projected_end_date == "2025-01-24"

    def test_two_samples_fall_back_to_rate(self, make_goal, make_samples) -> None:
        history = make_samples("2025-01-01", [200, 199])
        analysis = analyze_goal(make_goal(rate=7), history, today=TODAY)
        assert analysis.method == "rate_based"

    def test_no_projection_uses_trajectory_end(self, make_goal) -> None:
        goal = make_goal(start_value=200, target_value=200, target_date=None, rate=None)

        analysis = analyze_goal(goal, [], today=TODAY)

        assert analysis.method == "none"
        assert analysis.projection == []
        assert analysis.projected_end_date == "2025-04-01"
        assert analysis.current_value is None
        assert analysis.progress_percent == 0

    def test_fallback_days_bounds_rate_projection(self, make_goal) -> None:
        goal = make_goal(rate=0.5, target_date=None)
        analysis = analyze_goal(goal, [], 200, today=TODAY, fallback_days=30)
        assert analysis.projected_end_date == "2025-02-05"

    def test_to_dict_is_json_ready(self, make_goal, make_samples) -> None:
        history = make_samples("2025-01-01", [200, 199, 198, 197, 196, 195])
        payload = analyze_goal(make_goal(), history, today=TODAY).to_dict()

        assert set(payload) == {
            "history",
            "trajectory",
            "projection",
            "method",
            "current_value",
            "estimated_completion_date",
            "projected_end_date",
            "progress_percent",
        }
        assert payload["history"][0] == {"date": "2025-01-01", "value": 200}
        assert set(payload["projection"][0]) == {"date", "predicted", "upper", "lower"}

    def test_result_is_frozen(self) -> None:
        analysis = GoalAnalysis()
        with pytest.raises((AttributeError, TypeError)):
            analysis.method = "rate_based"  # type: ignore[misc]
