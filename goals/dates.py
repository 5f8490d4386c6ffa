"""
goals/dates.py

Calendar-day helpers shared by the goal math modules.

Every regression works on a day axis measured from the earliest sample's
date, where one day is exactly 86 400 seconds.  Dates come in as
``datetime.date``, ``datetime.datetime`` or ISO strings and go out as
``YYYY-MM-DD`` strings.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import Union

DateLike = Union[date, datetime, str]

SECONDS_PER_DAY: float = 86_400.0


def parse_day(value: DateLike) -> date:
    """
    Reduce *value* to its calendar date.

    ISO timestamps such as ``"2025-01-01T00:00:00Z"`` keep only the date
    portion; no timezone conversion is applied.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip().split("T")[0])


def to_datetime(value: DateLike) -> datetime:
    """
    Return a naive datetime for *value*.

    Plain dates map to midnight.  Aware datetimes keep their wall-clock
    time and drop the offset.
    """

    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time.min)

    raw = str(value).strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw).replace(tzinfo=None)


def day_offset(value: DateLike, base: datetime) -> float:
    """Fractional days from *base* to *value*."""
    return (to_datetime(value) - base).total_seconds() / SECONDS_PER_DAY


def shift_days(base: datetime, days: float) -> datetime:
    return base + timedelta(seconds=days * SECONDS_PER_DAY)


def format_day(value: DateLike) -> str:
    """Format *value* as ``YYYY-MM-DD``."""
    return to_datetime(value).date().isoformat()


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round half toward positive infinity.

    Built-in :func:`round` uses banker's rounding, which would move
    displayed chart values by a tenth on exact halves.
    """

    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
