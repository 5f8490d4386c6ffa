"""
goals/repository.py

SQLAlchemy ORM model and repository for manually logged goal entries.
No goal math lives here.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import Date, DateTime, Float, Index, UniqueConstraint, Uuid, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, Session, mapped_column

from db.base import Base
from goals.errors import GoalEntryPersistenceError
from goals.models import Sample

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ORM model
# ---------------------------------------------------------------------------

class GoalEntry(Base):
    """
    One manually recorded value for a goal on a calendar day.

    Columns
    -------
    id            – surrogate primary key (UUID v4).
    goal_id       – goal the value belongs to.
    user_id       – owner of the goal.
    value         – recorded metric value.
    recorded_date – calendar day of the measurement; one entry per goal/day.
    created_at    – UTC timestamp set at insert time.
    """

    __tablename__ = "goal_entries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    goal_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    recorded_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("goal_id", "recorded_date"),
        Index("idx_goal_entries_goal", "goal_id", "recorded_date"),
    )

    def to_sample(self) -> Sample:
        return Sample(date=self.recorded_date, value=float(self.value))

    def __repr__(self) -> str:
        return (
            f"<GoalEntry id={self.id} "
            f"goal={self.goal_id} "
            f"date={self.recorded_date.isoformat()} "
            f"value={self.value}>"
        )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class GoalEntryRepository:
    """
    Data-access layer for :class:`GoalEntry`.

    The repository flushes but never commits or rolls back; the caller owns
    the transaction boundary.

    Parameters
    ----------
    session:
        An active :class:`sqlalchemy.orm.Session`.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save_entry(
        self,
        *,
        goal_id: uuid.UUID,
        user_id: uuid.UUID,
        value: float,
        recorded_date: date,
    ) -> GoalEntry:
        """
        Record *value* for *goal_id* on *recorded_date*.

        An existing entry for the same goal and day is overwritten, so a
        corrected weigh-in replaces the earlier one.

        Raises
        ------
        GoalEntryPersistenceError
            When the database rejects the write.
        """

        try:
            entry = self._find(goal_id, recorded_date)
            if entry is None:
                entry = GoalEntry(
                    goal_id=goal_id,
                    user_id=user_id,
                    value=float(value),
                    recorded_date=recorded_date,
                )
                self._session.add(entry)
            else:
                entry.value = float(value)
            self._session.flush()
        except SQLAlchemyError as exc:
            raise GoalEntryPersistenceError(
                f"Could not save entry for goal {goal_id} on {recorded_date}."
            ) from exc

        logger.debug(
            "Saved goal entry goal_id=%s date=%s value=%s",
            goal_id,
            recorded_date,
            value,
        )
        return entry

    def delete_entry(self, *, goal_id: uuid.UUID, recorded_date: date) -> bool:
        """
        Remove the entry for *goal_id* on *recorded_date*.

        Returns ``False`` when no entry exists for that day.
        """

        try:
            entry = self._find(goal_id, recorded_date)
            if entry is None:
                return False
            self._session.delete(entry)
            self._session.flush()
        except SQLAlchemyError as exc:
            raise GoalEntryPersistenceError(
                f"Could not delete entry for goal {goal_id} on {recorded_date}."
            ) from exc
        return True

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_history(
        self,
        goal_id: uuid.UUID,
        *,
        days: int = 180,
        today: Optional[date] = None,
    ) -> list[Sample]:
        """
        Return the goal's samples from the last *days* days, oldest first.
        """

        since = (today or date.today()) - timedelta(days=days)
        stmt = (
            select(GoalEntry)
            .where(
                GoalEntry.goal_id == goal_id,
                GoalEntry.recorded_date >= since,
            )
            .order_by(GoalEntry.recorded_date.asc())
        )
        return [entry.to_sample() for entry in self._session.scalars(stmt)]

    def get_latest_value(self, goal_id: uuid.UUID) -> Optional[float]:
        """
        Return the most recently dated value for *goal_id*, or ``None``.
        """

        stmt = (
            select(GoalEntry.value)
            .where(GoalEntry.goal_id == goal_id)
            .order_by(GoalEntry.recorded_date.desc())
            .limit(1)
        )
        value = self._session.scalars(stmt).first()
        return None if value is None else float(value)

    def _find(self, goal_id: uuid.UUID, recorded_date: date) -> Optional[GoalEntry]:
        stmt = select(GoalEntry).where(
            GoalEntry.goal_id == goal_id,
            GoalEntry.recorded_date == recorded_date,
        )
        return self._session.scalars(stmt).first()
