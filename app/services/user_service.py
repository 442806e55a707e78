"""
User service.

Business logic for profile management and user data export.
"""

import datetime
import logging

from sqlmodel import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.db.repositories.challenge_enrollment import ChallengeEnrollmentRepository
from app.db.repositories.challenge_progress import ChallengeProgressRepository
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.schemas.auth import FederatedSyncRequest
from app.schemas.challenge import DailyProgressResponse
from app.schemas.export import DataExportResponse, DataIntegrityResponse, DataSnapshot, IntegrityCounts
from app.schemas.user import OnboardingRequest, UserResponse
from app.services.challenge_service import ChallengeService
from app.services.progress_aggregator import ProgressAggregator

logger = logging.getLogger(__name__)


def split_name(name: str) -> tuple[str, str]:
    """``"Ada Lovelace King"`` -> ``("Ada", "Lovelace King")``."""
    parts = name.split()
    if not parts:
        return name, ""
    return parts[0], " ".join(parts[1:])


class UserService:
    """Service for user-related business logic."""

    def __init__(self, session: Session):
        """
        Initialize service with database session.

        Args:
            session: SQLModel database session
        """
        self.repository = UserRepository(session)
        self.enrollments = ChallengeEnrollmentRepository(session)
        self.ledger = ChallengeProgressRepository(session)
        self.challenges = ChallengeService(session)
        self.aggregator = ProgressAggregator(session)

    def complete_onboarding(self, user: User, data: OnboardingRequest) -> User:
        """
        Store the onboarding profile.

        Args:
            user: Canonical user of the request
            data: Onboarding answers

        Returns:
            Updated user
        """
        name = data.name.strip()
        user.first_name, user.last_name = split_name(name)
        user.name = name
        user.age = data.age
        user.wellness_goals = data.wellness_goals
        user.preferred_time = data.preferred_time
        user.motivation = data.motivation
        user = self.repository.update(user)
        logger.info("Onboarding saved for user %s (complete=%s)", user.id, user.onboarding_complete)
        return user

    def check_federated_conflicts(self, user_id: str, data: FederatedSyncRequest) -> None:
        """
        Fail if the provider email or phone number is owned by a user other
        than *user_id*. Writes nothing, so it can run before any binding.

        Raises:
            ConflictError: The email or phone number belongs to another user.
        """
        if data.email is not None:
            owner = self.repository.get_by_email(data.email)
            if owner is not None and owner.id != user_id:
                raise ConflictError("Email already linked to another account")
        if data.phone_number is not None:
            owner = self.repository.get_by_phone(data.phone_number)
            if owner is not None and owner.id != user_id:
                raise ConflictError("Phone number already linked to another account")

    def apply_federated_profile(self, user: User, data: FederatedSyncRequest) -> User:
        """
        Copy identity-provider profile fields onto the user.

        Only fields the provider actually sent are written; onboarding
        answers are never touched.

        Raises:
            ConflictError: The email or phone number belongs to another user.
        """
        self.check_federated_conflicts(user.id, data)
        for field in ("email", "first_name", "last_name", "profile_image_url", "phone_number"):
            value = getattr(data, field)
            if value is not None:
                setattr(user, field, value)
        return self.repository.update(user)

    def update_language(self, user: User, language: str) -> User:
        user.preferred_language = language
        return self.repository.update(user)

    def export_data(self, user_id: str) -> DataExportResponse:
        """Everything stored about *user_id*."""
        user = self._get_or_raise(user_id)
        challenges = self.challenges.list_active(user_id)
        progress = [DailyProgressResponse.model_validate(p) for p in self.ledger.get_all_by_user(user_id)]
        snapshot = DataSnapshot(export_date=datetime.datetime.utcnow(), total_enrollments=len(challenges),
                                total_progress_entries=len(progress),
                                completed_challenges=sum(1 for c in challenges if c.is_complete), )
        logger.info("Exported data for user %s: %s", user_id, snapshot.model_dump())
        return DataExportResponse(user=UserResponse.model_validate(user), data_snapshot=snapshot,
                                  challenges=challenges, progress=progress)

    def data_integrity(self, user_id: str) -> DataIntegrityResponse:
        """Row counts and a cache-versus-ledger consistency check."""
        user = self._get_or_raise(user_id)
        drifted = self.aggregator.drifted_challenges(user_id)
        counts = IntegrityCounts(total_enrollments=self.enrollments.count_by_user(user_id),
                                 total_progress_entries=self.ledger.count_by_user(user_id),
                                 last_updated=user.updated_at, account_created=user.created_at, )
        return DataIntegrityResponse(user_id=user_id, user_exists=True, data_integrity=counts,
                                     drifted_challenges=drifted, status="healthy" if not drifted else "drifted",
                                     detail=None if not drifted else "Cached counts differ from the ledger", )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, user_id: str) -> User:
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user
