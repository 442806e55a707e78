"""
Progress aggregator.

Derives an enrollment's progress from the daily ledger. The ledger is the
only source of truth: the ``completed_count`` column on an enrollment is a
cache, and any drift found while reading is written back.
"""

import datetime
import logging
from typing import Optional

from sqlmodel import Session

from app.challenges.catalog import ChallengeDefinition
from app.challenges.streak import current_streak, longest_streak
from app.db.repositories.challenge_enrollment import ChallengeEnrollmentRepository
from app.db.repositories.challenge_progress import ChallengeProgressRepository
from app.models.challenge_enrollment import ChallengeEnrollment
from app.schemas.challenge import ProgressResponse

logger = logging.getLogger(__name__)


class ProgressAggregator:
    """Read-side computations over the progress ledger."""

    def __init__(self, session: Session):
        self.ledger = ChallengeProgressRepository(session)
        self.enrollments = ChallengeEnrollmentRepository(session)

    def completed_count(self, user_id: str, challenge_id: str) -> int:
        """Distinct completed days for one enrollment."""
        return self.ledger.count_completed_days(user_id, challenge_id)

    def snapshot(self, enrollment: ChallengeEnrollment, definition: ChallengeDefinition,
                 today: Optional[datetime.date] = None) -> ProgressResponse:
        """Full progress view of one enrollment, re-syncing a drifted cache."""
        today = today or datetime.date.today()
        dates = set(self.ledger.get_completed_dates(enrollment.user_id, enrollment.challenge_id))
        count = len(dates)

        if enrollment.completed_count != count:
            logger.warning("Enrollment %s/%s cached %d completed days, ledger has %d; re-syncing",
                           enrollment.user_id, enrollment.challenge_id, enrollment.completed_count, count)
            self.enrollments.set_completed_count(enrollment.user_id, enrollment.challenge_id, count)

        return ProgressResponse(
            challenge_id=enrollment.challenge_id,
            completed_count=count,
            duration=definition.duration,
            is_complete=count >= definition.duration,
            current_streak=current_streak(dates, today),
            longest_streak=longest_streak(dates),
            start_date=enrollment.start_date,
            last_activity_date=enrollment.last_activity_date,
            last_completed_date=max(dates) if dates else None,
        )

    def drifted_challenges(self, user_id: str) -> list[str]:
        """Challenge ids whose cached count disagrees with the ledger. Read-only."""
        summary = self.ledger.summarize_by_user(user_id)
        return [
            e.challenge_id
            for e in self.enrollments.get_all_by_user(user_id)
            if e.completed_count != summary.get(e.challenge_id, (0, None))[0]
        ]
