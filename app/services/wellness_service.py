"""
Wellness content service.

Personalised tips and thought-interruption techniques. Generated text is
decoration only: when the generator is unavailable a static fallback is
returned and the request still succeeds.
"""

import logging
import re

from sqlmodel import Session

from app.core.exceptions import ContentGenerationUnavailable
from app.models.user import User
from app.services.challenge_service import ChallengeService
from app.services.content_generator import ContentGenerator

logger = logging.getLogger(__name__)

FALLBACK_TIP = ("Take a moment today to practice deep breathing. Even three mindful breaths can help "
                "center your thoughts and reduce stress.")

FALLBACK_TECHNIQUES: list[str] = [
    "Take 5 deep breaths, counting slowly from 1 to 5 on each inhale and exhale.",
    "Name 5 things you can see, 4 you can touch, 3 you can hear, 2 you can smell, 1 you can taste.",
    "Challenge the thought: 'Is this helpful right now? What would I tell a friend thinking this?'",
    "Do 10 jumping jacks or stretch your arms above your head to shift physical energy.",
    "Visualize placing the worry in a box and setting it aside for later.",
]

MAX_TECHNIQUES = 10

# Leading list markers such as "1.", "2)", "-", "*", "•"
_LIST_MARKER = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*")


def parse_list(text: str, limit: int = MAX_TECHNIQUES) -> list[str]:
    """Split generated text into clean, non-empty lines."""
    items = [_LIST_MARKER.sub("", line).strip() for line in text.splitlines()]
    return [item for item in items if item][:limit]


class WellnessService:
    """Builds prompts from the user's profile and challenges."""

    def __init__(self, session: Session, generator: ContentGenerator):
        self.generator = generator
        self.challenges = ChallengeService(session)

    def daily_tip(self, user: User) -> str:
        prompt = (
            "Generate one short, practical daily wellness tip (2-3 sentences, warm and encouraging).\n"
            f"{self._profile_context(user)}"
            "Return only the tip text."
        )
        try:
            return self.generator.generate(prompt)
        except ContentGenerationUnavailable as exc:
            logger.warning("Daily tip unavailable for user %s, using fallback: %s", user.id, exc)
            return FALLBACK_TIP

    def thought_interruption_techniques(self, user: User) -> list[str]:
        prompt = (
            f"Generate {MAX_TECHNIQUES} quick thought interruption techniques (30 seconds to 2 minutes each), "
            "grounded in CBT and mindfulness, varied across breathing, grounding, cognitive and physical "
            "approaches.\n"
            f"{self._profile_context(user)}"
            "Format as a simple list, one technique per line, each in 1-2 sentences."
        )
        try:
            techniques = parse_list(self.generator.generate(prompt))
        except ContentGenerationUnavailable as exc:
            logger.warning("Techniques unavailable for user %s, using fallback: %s", user.id, exc)
            return list(FALLBACK_TECHNIQUES)
        return techniques or list(FALLBACK_TECHNIQUES)

    def _profile_context(self, user: User) -> str:
        lines = []
        if user.wellness_goals:
            lines.append(f"Wellness goals: {', '.join(user.wellness_goals)}")
        if user.preferred_time:
            lines.append(f"Preferred time for wellness activities: {user.preferred_time}")
        if user.motivation:
            lines.append(f"Motivation: {user.motivation}")
        active = [a.challenge.title for a in self.challenges.list_active(user.id) if not a.is_complete]
        if active:
            lines.append(f"Currently working on: {', '.join(active)}")
        if user.preferred_language and user.preferred_language != "en":
            lines.append(f"Respond in language code: {user.preferred_language}")
        return "".join(f"{line}\n" for line in lines)
