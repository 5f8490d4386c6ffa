"""
goals/orchestrator.py

Coordinates goal analysis: load history → analyze.
Contains no regression or projection math.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.config import GoalMathSettings, get_goal_math_settings
from app.logging_utils import log_event
from goals.analysis import GoalAnalysis, analyze_goal
from goals.dates import DateLike, parse_day
from goals.repository import GoalEntryRepository
from goals.schema import Goal

logger = logging.getLogger(__name__)


class GoalAnalysisOrchestrator:
    """
    Thin coordinator that wires goal entry storage to :func:`analyze_goal`.

    Each call to :meth:`analyze`:

    1. Loads the goal's recorded history over the configured lookback.
    2. Resolves the current value (explicit, else the latest entry, else
       the goal's start value).
    3. Runs the analysis with the configured half-life and band width.

    Parameters
    ----------
    session:
        An active :class:`sqlalchemy.orm.Session` passed to the repository.
    settings:
        Overrides the environment-driven :class:`GoalMathSettings`.
    """

    def __init__(
        self,
        session: Session,
        settings: Optional[GoalMathSettings] = None,
    ) -> None:
        self._repository = GoalEntryRepository(session)
        self._settings = settings or get_goal_math_settings()

    def analyze(
        self,
        goal: Goal,
        *,
        current_value: Optional[float] = None,
        today: Optional[DateLike] = None,
    ) -> GoalAnalysis:
        """
        Analyze *goal* from its stored entries.

        Raises
        ------
        ValueError
            When the goal has no ``id`` to load entries for.
        """

        if goal.id is None:
            raise ValueError("Goal has no id; cannot load its entries.")

        goal_id = uuid.UUID(goal.id)
        reference = parse_day(today) if today is not None else date.today()

        history = self._repository.get_history(
            goal_id,
            days=self._settings.history_days,
            today=reference,
        )
        if current_value is None:
            current_value = self._repository.get_latest_value(goal_id)
        if current_value is None:
            current_value = goal.start_value

        analysis = analyze_goal(
            goal,
            history,
            current_value,
            today=today if today is not None else reference,
            half_life_days=self._settings.half_life_days,
            confidence_multiplier=self._settings.confidence_multiplier,
            fallback_days=self._settings.projection_days,
        )

        log_event(
            logger,
            logging.INFO,
            "goal_analyzed",
            goal_id=goal.id,
            samples=len(analysis.history),
            method=analysis.method,
            estimated_completion_date=analysis.estimated_completion_date,
            progress_percent=analysis.progress_percent,
        )
        return analysis
