"""
Repository-layer exceptions for goal entry storage.
"""

from __future__ import annotations


class GoalEntryRepositoryError(Exception):
    """Base exception for goal entry repository failures."""


class GoalEntryPersistenceError(GoalEntryRepositoryError):
    """Raised when writing or deleting a goal entry fails."""
