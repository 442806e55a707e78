"""
Challenge enrollment repository.

Handles database operations for ChallengeEnrollment model.
"""

import datetime
from typing import Optional

from sqlalchemy import func, update
from sqlmodel import Session, select

from app.db.upsert import insert_for
from app.models.challenge_enrollment import ChallengeEnrollment


class ChallengeEnrollmentRepository:
    """Repository for ChallengeEnrollment database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: str, challenge_id: str) -> Optional[ChallengeEnrollment]:
        statement = (
            select(ChallengeEnrollment)
            .where(
                ChallengeEnrollment.user_id == user_id,
                ChallengeEnrollment.challenge_id == challenge_id,
            )
            .execution_options(populate_existing=True)
        )
        return self.session.exec(statement).first()

    def upsert(self, user_id: str, challenge_id: str, now: datetime.datetime) -> ChallengeEnrollment:
        """Create the enrollment, or only touch ``last_activity_date``.

        ``start_date`` and ``completed_count`` of an existing row are never
        modified here.
        """
        statement = insert_for(self.session, ChallengeEnrollment).values(
            user_id=user_id,
            challenge_id=challenge_id,
            start_date=now,
            last_activity_date=now,
            completed_count=0,
            is_active=True,
        )
        statement = statement.on_conflict_do_update(
            index_elements=[ChallengeEnrollment.user_id, ChallengeEnrollment.challenge_id],
            set_={ "last_activity_date": now },
        )
        self.session.execute(statement)
        self.session.commit()
        return self.get(user_id, challenge_id)

    def get_all_by_user(self, user_id: str) -> list[ChallengeEnrollment]:
        """All enrollments for a user, oldest first."""
        statement = (
            select(ChallengeEnrollment)
            .where(ChallengeEnrollment.user_id == user_id)
            .order_by(ChallengeEnrollment.start_date, ChallengeEnrollment.id)
            .execution_options(populate_existing=True)
        )
        return list(self.session.exec(statement).all())

    def get_challenge_ids_by_user(self, user_id: str) -> set[str]:
        statement = select(ChallengeEnrollment.challenge_id).where(ChallengeEnrollment.user_id == user_id)
        return set(self.session.exec(statement).all())

    def set_completed_count(self, user_id: str, challenge_id: str, completed_count: int,
                            last_activity_date: Optional[datetime.datetime] = None) -> None:
        """Write the ledger-derived count back to the cached column and commit.

        Commits the current unit of work, including any ledger writes made
        on the same session.
        """
        values: dict = { "completed_count": completed_count }
        if last_activity_date is not None:
            values["last_activity_date"] = last_activity_date
        statement = (
            update(ChallengeEnrollment)
            .where(
                ChallengeEnrollment.user_id == user_id,
                ChallengeEnrollment.challenge_id == challenge_id,
            )
            .values(**values)
        )
        self.session.execute(statement)
        self.session.commit()

    def count_by_user(self, user_id: str) -> int:
        statement = select(func.count()).select_from(ChallengeEnrollment).where(
            ChallengeEnrollment.user_id == user_id)
        return self.session.exec(statement).one()
