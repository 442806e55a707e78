"""Challenge domain logic: static catalog and streak computation."""

from app.challenges.catalog import CHALLENGE_CATALOG, ChallengeDefinition, get_challenge
from app.challenges.streak import current_streak, longest_streak

__all__ = ["CHALLENGE_CATALOG", "ChallengeDefinition", "get_challenge", "current_streak", "longest_streak"]
