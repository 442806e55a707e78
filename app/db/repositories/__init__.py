"""Database repositories."""

from app.db.repositories.user import UserRepository
from app.db.repositories.session_store import SessionStoreRepository
from app.db.repositories.challenge_enrollment import ChallengeEnrollmentRepository
from app.db.repositories.challenge_progress import ChallengeProgressRepository

__all__ = [
    "UserRepository",
    "SessionStoreRepository",
    "ChallengeEnrollmentRepository",
    "ChallengeProgressRepository",
]
