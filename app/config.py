"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def env_bool(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def env_str(name: str, default: str) -> str:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class GoalMathSettings:
    """
    Tunables for goal analysis.
    """

    half_life_days: float = 14.0
    """Age, in days, at which a sample's regression weight halves."""

    confidence_multiplier: float = 1.96
    history_days: int = 180
    """How far back goal history is loaded for trend fitting."""

    projection_days: int = 90


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    structured: bool = False


@lru_cache(maxsize=1)
def get_goal_math_settings() -> GoalMathSettings:
    """
    Return cached goal analysis settings from environment variables.
    """

    return GoalMathSettings(
        half_life_days=max(0.1, env_float("GOAL_HALF_LIFE_DAYS", 14.0)),
        confidence_multiplier=max(0.0, env_float("GOAL_CONFIDENCE_MULTIPLIER", 1.96)),
        history_days=max(1, env_int("GOAL_HISTORY_DAYS", 180)),
        projection_days=max(1, env_int("GOAL_PROJECTION_DAYS", 90)),
    )


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """
    Return cached logging settings from environment variables.
    """

    return LoggingSettings(
        level=env_str("LOG_LEVEL", "INFO").upper(),
        structured=env_bool("LOG_STRUCTURED", False),
    )
