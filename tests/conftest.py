"""
Shared fixtures for goal math tests.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Callable

import pytest

from goals.models import Sample
from goals.schema import Goal


def _make_samples(start: str, values: list[float], interval_days: int = 1) -> list[Sample]:
    first = date.fromisoformat(start)
    return [
        Sample(date=first + timedelta(days=i * interval_days), value=value)
        for i, value in enumerate(values)
    ]


def _make_goal(**overrides: Any) -> Goal:
    row: dict[str, Any] = {
        "id": "6f1c1f9e-3a5b-4d44-9a55-2d7d3c1f0a01",
        "user_id": "0b8f3c52-5f4e-4f7a-a9a4-8b8c6c7e2d10",
        "goal_type": "weight",
        "title": "Lose weight",
        "target_value": 180,
        "unit": "lbs",
        "start_value": 200,
        "start_date": "2025-01-01T00:00:00Z",
        "target_date": "2025-07-01T00:00:00Z",
        "rate": None,
        "rate_unit": None,
        "data_source": "manual",
        "is_active": True,
    }
    row.update(overrides)
    return Goal.model_validate(row)


@pytest.fixture()
def make_samples() -> Callable[..., list[Sample]]:
    """Factory: daily (or every *interval_days*) samples from an ISO date."""
    return _make_samples


@pytest.fixture()
def make_goal() -> Callable[..., Goal]:
    """Factory: a 200 → 180 lbs weight goal over H1 2025, with overrides."""
    return _make_goal
