"""
Challenge enrollment service.

Idempotent enrollment plus the available / active / completed listings.
Completion is never stored as a state: a challenge is done when its
ledger-derived day count reaches the catalog duration.
"""

import datetime
import logging
from typing import Optional

from sqlmodel import Session

from app.challenges.catalog import ChallengeDefinition, all_challenges, get_challenge
from app.core.exceptions import InvalidChallengeError
from app.db.repositories.challenge_enrollment import ChallengeEnrollmentRepository
from app.db.repositories.challenge_progress import ChallengeProgressRepository
from app.models.challenge_enrollment import ChallengeEnrollment
from app.schemas.challenge import (ActiveChallengeResponse, ChallengeResponse, CompletedChallengeResponse,
                                   EnrollmentResponse, )
from app.services.progress_aggregator import ProgressAggregator

logger = logging.getLogger(__name__)


def get_definition_or_raise(challenge_id: str) -> ChallengeDefinition:
    definition = get_challenge(challenge_id)
    if definition is None:
        raise InvalidChallengeError(challenge_id)
    return definition


def to_challenge_response(definition: ChallengeDefinition) -> ChallengeResponse:
    return ChallengeResponse.model_validate(definition)


class ChallengeService:
    """Service for challenge enrollment business logic."""

    def __init__(self, session: Session):
        self.repository = ChallengeEnrollmentRepository(session)
        self.ledger = ChallengeProgressRepository(session)
        self.aggregator = ProgressAggregator(session)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def catalog(self) -> list[ChallengeResponse]:
        return [to_challenge_response(c) for c in all_challenges()]

    def enroll(self, user_id: str, challenge_id: str) -> EnrollmentResponse:
        """Join a challenge, or refresh the existing enrollment.

        Calling this again never creates a second row and never resets
        ``start_date`` or progress; it only touches ``last_activity_date``.

        Raises:
            InvalidChallengeError: *challenge_id* is not in the catalog.
        """
        definition = get_definition_or_raise(challenge_id)
        enrollment = self.repository.upsert(user_id, challenge_id, datetime.datetime.utcnow())
        logger.info("User %s enrolled in %s", user_id, challenge_id)
        return self._to_enrollment_response(enrollment, definition)

    def list_available(self, user_id: str) -> list[ChallengeResponse]:
        """Catalog entries the user has not enrolled in."""
        enrolled = self.repository.get_challenge_ids_by_user(user_id)
        return [to_challenge_response(c) for c in all_challenges() if c.challenge_id not in enrolled]

    def list_active(self, user_id: str, today: Optional[datetime.date] = None) -> list[ActiveChallengeResponse]:
        """Every enrollment with its ledger-derived progress."""
        active = []
        for enrollment in self.repository.get_all_by_user(user_id):
            definition = get_challenge(enrollment.challenge_id)
            if definition is None:
                logger.warning("Enrollment %s references unknown challenge %s", enrollment.id,
                               enrollment.challenge_id)
                continue
            progress = self.aggregator.snapshot(enrollment, definition, today)
            active.append(ActiveChallengeResponse(**progress.model_dump(),
                                                  challenge=to_challenge_response(definition)))
        return active

    def list_completed(self, user_id: str) -> list[CompletedChallengeResponse]:
        """Enrollments whose distinct completed days reached the catalog duration."""
        summary = self.ledger.summarize_by_user(user_id)
        completed = []
        for challenge_id in sorted(self.repository.get_challenge_ids_by_user(user_id)):
            definition = get_challenge(challenge_id)
            if definition is None:
                continue
            count, last_date = summary.get(challenge_id, (0, None))
            if count >= definition.duration:
                completed.append(CompletedChallengeResponse(challenge=to_challenge_response(definition),
                                                            completed_count=count, points=definition.points,
                                                            completed_at=last_date, ))
        return completed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _to_enrollment_response(self, enrollment: ChallengeEnrollment,
                                definition: ChallengeDefinition) -> EnrollmentResponse:
        return EnrollmentResponse(id=enrollment.id, user_id=enrollment.user_id,
                                  challenge_id=enrollment.challenge_id, start_date=enrollment.start_date,
                                  last_activity_date=enrollment.last_activity_date,
                                  completed_count=self.aggregator.completed_count(enrollment.user_id,
                                                                                  enrollment.challenge_id),
                                  is_active=enrollment.is_active, challenge=to_challenge_response(definition), )
