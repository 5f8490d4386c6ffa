"""
Analyze one goal from the CLI and print the chart payload as JSON.

The input file holds ``{"goal": {...}, "history": [{"date", "value"}, ...],
"current_value": number | null}``.  With ``--from-db`` the history is read
from the goal entry table instead and only ``goal`` is required.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.logging_utils import configure_logging
from goals.analysis import analyze_goal
from goals.dates import parse_day
from goals.models import Sample
from goals.schema import Goal

logger = logging.getLogger(__name__)


def _analyze_from_db(goal: Goal, current_value: Optional[float], today) -> dict:
    from db.session import SessionLocal
    from goals.orchestrator import GoalAnalysisOrchestrator

    with SessionLocal() as db:
        analysis = GoalAnalysisOrchestrator(db).analyze(
            goal, current_value=current_value, today=today
        )
    return analysis.to_dict()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a goal's trajectory and projection.")
    parser.add_argument("input", type=Path, help="JSON file with the goal and its history.")
    parser.add_argument(
        "--today",
        dest="today",
        default=None,
        help="Reference date (YYYY-MM-DD); defaults to the current date.",
    )
    parser.add_argument(
        "--from-db",
        dest="from_db",
        action="store_true",
        help="Load history from the goal entry table instead of the input file.",
    )
    args = parser.parse_args(argv)

    configure_logging()

    try:
        payload = json.loads(args.input.read_text(encoding="utf-8"))
        goal = Goal.model_validate(payload["goal"])
        history = [Sample.from_mapping(item) for item in payload.get("history", [])]
        today = parse_day(args.today) if args.today else None
        current_value = payload.get("current_value")
        if current_value is not None:
            current_value = float(current_value)
    except (OSError, ValueError, KeyError, TypeError, ValidationError) as exc:
        logger.error("Invalid goal input %s: %s", args.input, exc)
        return 1

    if args.from_db:
        try:
            result = _analyze_from_db(goal, current_value, today)
        except (ValueError, RuntimeError, SQLAlchemyError) as exc:
            logger.error("Could not analyze goal %s from the database: %s", goal.id, exc)
            return 1
    else:
        history.sort(key=lambda sample: sample.date)
        result = analyze_goal(goal, history, current_value, today=today).to_dict()

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
