"""Business logic services."""

from app.services.identity_resolver import IdentityResolver, ResolvedIdentity
from app.services.phone_login_service import PhoneLoginService
from app.services.user_service import UserService
from app.services.challenge_service import ChallengeService
from app.services.progress_aggregator import ProgressAggregator
from app.services.progress_service import ProgressService
from app.services.content_generator import GeminiContentGenerator, get_content_generator
from app.services.wellness_service import WellnessService

__all__ = [
    "IdentityResolver",
    "ResolvedIdentity",
    "PhoneLoginService",
    "UserService",
    "ChallengeService",
    "ProgressAggregator",
    "ProgressService",
    "GeminiContentGenerator",
    "get_content_generator",
    "WellnessService",
]
