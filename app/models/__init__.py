"""SQLModel database models."""

from app.models.user import User
from app.models.session import SessionRecord
from app.models.challenge_enrollment import ChallengeEnrollment
from app.models.challenge_progress import ChallengeDailyProgress

__all__ = [
    "User",
    "SessionRecord",
    "ChallengeEnrollment",
    "ChallengeDailyProgress",
]
