"""
Challenge daily progress repository.

Reads and writes the progress ledger. Writes are natural-key upserts and
do not commit; the caller ends the unit of work.
"""

import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.db.upsert import insert_for
from app.models.challenge_progress import ChallengeDailyProgress


class ChallengeProgressRepository:
    """Repository for ChallengeDailyProgress database operations."""

    def __init__(self, session: Session):
        self.session = session

    def mark_completed(self, user_id: str, challenge_id: str, date: datetime.date) -> None:
        """Upsert the (challenge, user, date) fact to ``completed = true``."""
        statement = insert_for(self.session, ChallengeDailyProgress).values(
            challenge_id=challenge_id,
            user_id=user_id,
            date=date,
            completed=True,
        )
        statement = statement.on_conflict_do_update(
            index_elements=[
                ChallengeDailyProgress.challenge_id,
                ChallengeDailyProgress.user_id,
                ChallengeDailyProgress.date,
            ],
            set_={ "completed": True },
        )
        self.session.execute(statement)

    def get(self, user_id: str, challenge_id: str, date: datetime.date) -> Optional[ChallengeDailyProgress]:
        return self.session.get(ChallengeDailyProgress, (challenge_id, user_id, date), populate_existing=True)

    def count_completed_days(self, user_id: str, challenge_id: str) -> int:
        """Number of distinct completed days for one enrollment."""
        statement = select(func.count(func.distinct(ChallengeDailyProgress.date))).where(
            ChallengeDailyProgress.user_id == user_id,
            ChallengeDailyProgress.challenge_id == challenge_id,
            ChallengeDailyProgress.completed == True,  # noqa: E712
        )
        return self.session.exec(statement).one()

    def get_completed_dates(self, user_id: str, challenge_id: str) -> list[datetime.date]:
        """Completed dates for one enrollment, ascending."""
        statement = (
            select(ChallengeDailyProgress.date)
            .where(
                ChallengeDailyProgress.user_id == user_id,
                ChallengeDailyProgress.challenge_id == challenge_id,
                ChallengeDailyProgress.completed == True,  # noqa: E712
            )
            .order_by(ChallengeDailyProgress.date)
        )
        return list(self.session.exec(statement).all())

    def summarize_by_user(self, user_id: str) -> dict[str, tuple[int, Optional[datetime.date]]]:
        """Per challenge: ``(distinct completed days, most recent completed date)``."""
        statement = (
            select(
                ChallengeDailyProgress.challenge_id,
                func.count(func.distinct(ChallengeDailyProgress.date)),
                func.max(ChallengeDailyProgress.date),
            )
            .where(
                ChallengeDailyProgress.user_id == user_id,
                ChallengeDailyProgress.completed == True,  # noqa: E712
            )
            .group_by(ChallengeDailyProgress.challenge_id)
        )
        return { challenge_id: (count, last_date) for challenge_id, count, last_date in self.session.exec(statement) }

    def get_all_by_user(self, user_id: str) -> list[ChallengeDailyProgress]:
        statement = (
            select(ChallengeDailyProgress)
            .where(ChallengeDailyProgress.user_id == user_id)
            .order_by(ChallengeDailyProgress.challenge_id, ChallengeDailyProgress.date)
        )
        return list(self.session.exec(statement).all())

    def count_by_user(self, user_id: str) -> int:
        statement = select(func.count()).select_from(ChallengeDailyProgress).where(
            ChallengeDailyProgress.user_id == user_id)
        return self.session.exec(statement).one()
