"""
Built-in challenge catalog.

Challenges are code-defined and immutable at runtime. Enrollments store
only the ``challenge_id``; title, duration, points and the rest are joined
from this catalog when building responses.

To add a challenge, append a :class:`ChallengeDefinition` to
``_CHALLENGES`` below.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field


class ChallengeType(str, Enum):
    """Wellness area a challenge practices."""
    BREATHING = "breathing"
    GRATITUDE = "gratitude"
    MOOD = "mood"
    WELLNESS = "wellness"


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    EASY = "Easy"
    INTERMEDIATE = "Intermediate"


class ChallengeDefinition(BaseModel):
    """Static description of a multi-day challenge."""

    model_config = ConfigDict(frozen=True)

    challenge_id: str = Field(..., description="Stable slug, e.g. 'mindful-week'")
    title: str
    description: str
    duration: int = Field(..., ge=1, description="Distinct completed days required")
    type: ChallengeType
    difficulty: Difficulty
    points: int = Field(..., ge=0)
    icon: str = ""


_CHALLENGES: list[ChallengeDefinition] = [
    ChallengeDefinition(
        challenge_id="mindful-week",
        title="7-Day Mindfulness Challenge",
        description="Practice 5 minutes of mindful breathing daily for one week",
        duration=7,
        type=ChallengeType.BREATHING,
        difficulty=Difficulty.BEGINNER,
        points=50,
        icon="🧘‍♀️",
    ),
    ChallengeDefinition(
        challenge_id="gratitude-streak",
        title="14-Day Gratitude Streak",
        description="Write 3 things you're grateful for every day for 2 weeks",
        duration=14,
        type=ChallengeType.GRATITUDE,
        difficulty=Difficulty.EASY,
        points=70,
        icon="🙏",
    ),
    ChallengeDefinition(
        challenge_id="mood-tracker",
        title="21-Day Mood Awareness",
        description="Log your mood twice daily and reflect on patterns",
        duration=21,
        type=ChallengeType.MOOD,
        difficulty=Difficulty.EASY,
        points=80,
        icon="😊",
    ),
    ChallengeDefinition(
        challenge_id="stress-buster",
        title="10-Day Stress Relief",
        description="Use stress management tools daily when feeling overwhelmed",
        duration=10,
        type=ChallengeType.WELLNESS,
        difficulty=Difficulty.INTERMEDIATE,
        points=60,
        icon="🌟",
    ),
]

CHALLENGE_CATALOG: Mapping[str, ChallengeDefinition] = MappingProxyType(
    { c.challenge_id: c for c in _CHALLENGES }
)


def get_challenge(challenge_id: str) -> ChallengeDefinition | None:
    """Look up a challenge by its ID.  Returns ``None`` if not found."""
    return CHALLENGE_CATALOG.get(challenge_id)


def all_challenges() -> list[ChallengeDefinition]:
    """All catalog entries in declaration order."""
    return list(CHALLENGE_CATALOG.values())
