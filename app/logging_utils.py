"""
Logging setup and structured logging helpers.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from app.config import get_logging_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    """
    Configure root logging once for the process.
    """

    settings = get_logging_settings()
    logging.basicConfig(
        level=getattr(logging, settings.level, logging.INFO),
        format=LOG_FORMAT,
    )


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one log line for *event*.

    With ``LOG_STRUCTURED`` enabled the line is compact JSON; otherwise it
    is ``event key=value ...``.
    """

    if not logger.isEnabledFor(level):
        return

    if get_logging_settings().structured:
        payload = {"event": event, **fields}
        logger.log(level, json.dumps(payload, default=str, sort_keys=True))
        return

    details = " ".join(f"{key}={fields[key]!r}" for key in sorted(fields))
    logger.log(level, "%s %s", event, details)
