"""
tests/test_goal_schema.py

Validation tests for the Goal model and the calendar-day helpers it uses.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from goals.dates import day_offset, format_day, parse_day, round_half_up, to_datetime
from goals.schema import Goal


class TestGoal:
    def test_timestamps_reduced_to_dates(self, make_goal) -> None:
        goal = make_goal()
        assert goal.start_date == date(2025, 1, 1)
        assert goal.target_date == date(2025, 7, 1)

    def test_blank_target_date_is_none(self, make_goal) -> None:
        assert make_goal(target_date="").target_date is None

    def test_extra_fields_ignored(self, make_goal) -> None:
        goal = make_goal(created_at="2025-01-01T00:00:00Z", updated_at=None)
        assert not hasattr(goal, "created_at")

    def test_ids_stringified(self, make_goal) -> None:
        goal_id = uuid.UUID("6f1c1f9e-3a5b-4d44-9a55-2d7d3c1f0a01")
        assert make_goal(id=goal_id).id == str(goal_id)

    def test_missing_target_value_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Goal.model_validate({"start_date": "2025-01-01"})

    def test_missing_start_date_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Goal.model_validate({"target_value": 180})

    def test_bad_date_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Goal.model_validate({"target_value": 180, "start_date": "not-a-date"})

    def test_frozen(self, make_goal) -> None:
        goal = make_goal()
        with pytest.raises(ValidationError):
            goal.target_value = 170  # type: ignore[misc]

    @pytest.mark.parametrize(
        "rate, expected",
        [(None, False), (0, False), (-1, False), (0.5, True)],
    )
    def test_has_rate(self, make_goal, rate, expected: bool) -> None:
        assert make_goal(rate=rate).has_rate() is expected


class TestDates:
    @pytest.mark.parametrize(
        "value",
        [
            date(2025, 3, 4),
            datetime(2025, 3, 4, 23, 59),
            "2025-03-04",
            "2025-03-04T10:00:00Z",
            "2025-03-04T10:00:00+05:00",
        ],
    )
    def test_parse_day(self, value) -> None:
        assert parse_day(value) == date(2025, 3, 4)

    def test_to_datetime_drops_offset(self) -> None:
        aware = datetime(2025, 3, 4, 10, tzinfo=timezone.utc)
        assert to_datetime(aware) == datetime(2025, 3, 4, 10)
        assert to_datetime("2025-03-04T10:00:00Z") == datetime(2025, 3, 4, 10)

    def test_day_offset_is_fractional(self) -> None:
        base = datetime(2025, 1, 1)
        assert day_offset("2025-01-03T12:00:00", base) == pytest.approx(2.5)

    def test_format_day(self) -> None:
        assert format_day(datetime(2025, 12, 31, 23, 0)) == "2025-12-31"

    @pytest.mark.parametrize(
        "value, digits, expected",
        [(2.5, 0, 3.0), (-2.5, 0, -2.0), (0.25, 1, 0.3), (12.5, 0, 13.0)],
    )
    def test_round_half_up(self, value: float, digits: int, expected: float) -> None:
        assert round_half_up(value, digits) == pytest.approx(expected)
