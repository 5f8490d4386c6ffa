"""
goals/models.py

Plain records exchanged by the goal math functions.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Mapping

from goals.dates import parse_day


@dataclass(frozen=True)
class Sample:
    """
    One observed value of a tracked metric on a calendar day.
    """

    date: date
    value: float

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Sample":
        """Build a sample from a ``{"date": ..., "value": ...}`` mapping."""
        return cls(date=parse_day(raw["date"]), value=float(raw["value"]))

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value}


@dataclass(frozen=True)
class RegressionResult:
    """
    Ordinary least-squares fit over ``(day_offset, value)`` pairs.

    ``intercept`` is the fitted value on the first sample's date.
    """

    slope: float
    """Change in value per day."""

    intercept: float
    r2: float
    standard_error: float
    n: int
    x_mean: float
    sum_squared_x: float
    """Sum of ``(x_i - x_mean) ** 2``."""


@dataclass(frozen=True)
class WeightedRegressionResult:
    """
    Exponential-decay weighted least-squares fit.
    """

    slope: float
    intercept: float
    standard_error: float
    n_effective: float
    """``(sum w) ** 2 / sum(w ** 2)``."""

    x_mean_weighted: float
    sum_weighted_squared_x: float
    """Sum of ``w_i * (x_i - x_mean_weighted) ** 2``."""


@dataclass(frozen=True)
class TrajectoryPoint:
    date: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProjectionPoint:
    """
    Forecast value with a symmetric confidence band.
    """

    date: str
    predicted: float
    upper: float
    lower: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
