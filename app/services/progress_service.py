"""
Progress ledger service.

Records daily completions and re-derives the enrollment's cached count
from the ledger in the same unit of work. Marking a day twice is a no-op
after the first call: the fact is an upsert keyed by (challenge, user, day)
and the count is a recount, not an increment.
"""

import datetime
import logging
from typing import Optional

from sqlmodel import Session

from app.core.exceptions import NotFoundError
from app.db.repositories.challenge_enrollment import ChallengeEnrollmentRepository
from app.db.repositories.challenge_progress import ChallengeProgressRepository
from app.schemas.challenge import ProgressResponse
from app.services.challenge_service import ChallengeService, get_definition_or_raise
from app.services.progress_aggregator import ProgressAggregator

logger = logging.getLogger(__name__)


class ProgressService:
    """Service for recording and reading challenge progress."""

    def __init__(self, session: Session):
        self.ledger = ChallengeProgressRepository(session)
        self.enrollments = ChallengeEnrollmentRepository(session)
        self.aggregator = ProgressAggregator(session)
        self.challenges = ChallengeService(session)

    def record_completion(self, user_id: str, challenge_id: str, date: Optional[datetime.date] = None,
                          completed: bool = True, today: Optional[datetime.date] = None) -> ProgressResponse:
        """Mark *date* done for the enrollment and return the recomputed progress.

        Args:
            user_id: Canonical user id.
            challenge_id: Catalog key.
            date: Calendar day being completed. Defaults to *today*.
            completed: ``False`` records nothing; ledger facts are never unset.
            today: Reference day for defaults and streaks (server date if omitted).

        Raises:
            InvalidChallengeError: *challenge_id* is not in the catalog.
            NotFoundError: *completed* is ``False`` and the user is not enrolled.
        """
        definition = get_definition_or_raise(challenge_id)
        today = today or datetime.date.today()
        enrolled = self.enrollments.get(user_id, challenge_id) is not None

        if not completed and not enrolled:
            raise NotFoundError("Enrollment", challenge_id)

        if completed:
            if not enrolled:
                self.challenges.enroll(user_id, challenge_id)
            day = date or today
            self.ledger.mark_completed(user_id, challenge_id, day)
            count = self.ledger.count_completed_days(user_id, challenge_id)
            self.enrollments.set_completed_count(user_id, challenge_id, count,
                                                 last_activity_date=datetime.datetime.utcnow())
            logger.info("User %s completed %s on %s (%d/%d days)", user_id, challenge_id, day, count,
                        definition.duration)

        enrollment = self.enrollments.get(user_id, challenge_id)
        return self.aggregator.snapshot(enrollment, definition, today)

    def get_progress(self, user_id: str, challenge_id: str,
                     today: Optional[datetime.date] = None) -> ProgressResponse:
        """Ledger-derived progress for one enrollment.

        Raises:
            InvalidChallengeError: *challenge_id* is not in the catalog.
            NotFoundError: The user is not enrolled.
        """
        definition = get_definition_or_raise(challenge_id)
        enrollment = self.enrollments.get(user_id, challenge_id)
        if enrollment is None:
            raise NotFoundError("Enrollment", challenge_id)
        return self.aggregator.snapshot(enrollment, definition, today)
