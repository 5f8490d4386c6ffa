"""Goal descriptor as returned by the backend ``goals`` table."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from goals.dates import parse_day


class Goal(BaseModel):
    """
    Immutable goal record consumed by the trajectory and projection math.

    ``rate`` is expressed in value-per-week.  Timestamp columns
    (``start_date``, ``target_date``) are reduced to calendar dates.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    target_value: float
    unit: str = ""
    start_value: Optional[float] = None
    start_date: date
    target_date: Optional[date] = None
    rate: Optional[float] = None
    rate_unit: Optional[str] = None

    id: Optional[str] = None
    user_id: Optional[str] = None
    goal_type: Optional[str] = None
    title: Optional[str] = None
    data_source: str = "manual"
    is_active: bool = True

    @field_validator("start_date", mode="before")
    @classmethod
    def _coerce_start_date(cls, value: Any) -> date:
        return parse_day(value)

    @field_validator("target_date", mode="before")
    @classmethod
    def _coerce_target_date(cls, value: Any) -> Optional[date]:
        if value is None or value == "":
            return None
        return parse_day(value)

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _stringify_ids(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    def has_rate(self) -> bool:
        """True when a usable positive weekly rate is set."""
        return self.rate is not None and self.rate > 0
