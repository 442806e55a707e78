"""Tests for generated wellness content and its static fallbacks."""

import pytest

from app.core.exceptions import ContentGenerationUnavailable
from app.db.repositories.user import UserRepository
from app.services.challenge_service import ChallengeService
from app.services.content_generator import GeminiContentGenerator
from app.services.wellness_service import FALLBACK_TECHNIQUES, FALLBACK_TIP, WellnessService, parse_list


@pytest.fixture
def user(db):
    user = UserRepository(db).ensure_exists("u1", first_name="New User")
    user.wellness_goals = ["sleep better"]
    user.motivation = "less stress"
    user.preferred_language = "es"
    return UserRepository(db).update(user)


class TestParseList:
    def test_strips_markers_and_blank_lines(self):
        text = "1. Breathe\n\n2) Stretch\n- Walk\n* Drink water\n• Smile"
        assert parse_list(text) == ["Breathe", "Stretch", "Walk", "Drink water", "Smile"]

    def test_limit(self):
        assert len(parse_list("\n".join(f"{n}. tip" for n in range(20)))) == 10


class TestDailyTip:
    def test_generated(self, db, user, make_generator):
        generator = make_generator("Drink a glass of water.")
        assert WellnessService(db, generator).daily_tip(user) == "Drink a glass of water."

    def test_prompt_uses_profile_and_active_challenges(self, db, user, make_generator):
        ChallengeService(db).enroll(user.id, "mindful-week")
        generator = make_generator("tip")
        WellnessService(db, generator).daily_tip(user)
        [prompt] = generator.prompts
        assert "sleep better" in prompt
        assert "7-Day Mindfulness Challenge" in prompt
        assert "language code: es" in prompt

    def test_fallback_when_unavailable(self, db, user, make_generator):
        assert WellnessService(db, make_generator()).daily_tip(user) == FALLBACK_TIP


class TestThoughtInterruption:
    def test_generated(self, db, user, make_generator):
        generator = make_generator("1. Breathe\n2. Ground yourself")
        techniques = WellnessService(db, generator).thought_interruption_techniques(user)
        assert techniques == ["Breathe", "Ground yourself"]

    def test_fallback_when_unavailable(self, db, user, make_generator):
        techniques = WellnessService(db, make_generator()).thought_interruption_techniques(user)
        assert techniques == FALLBACK_TECHNIQUES

    def test_fallback_when_output_is_empty_list(self, db, user, make_generator):
        techniques = WellnessService(db, make_generator("\n - \n")).thought_interruption_techniques(user)
        assert techniques == FALLBACK_TECHNIQUES


class TestGeminiContentGenerator:
    def test_unconfigured(self):
        generator = GeminiContentGenerator(api_key="")
        assert generator.configured is False
        with pytest.raises(ContentGenerationUnavailable):
            generator.generate("hello")

    def test_client_error_is_wrapped(self):
        class BrokenModels:
            def generate_content(self, **kwargs):
                raise RuntimeError("quota exceeded")

        class BrokenClient:
            models = BrokenModels()

        with pytest.raises(ContentGenerationUnavailable):
            GeminiContentGenerator(client=BrokenClient()).generate("hello")

    def test_text_is_stripped(self):
        class Response:
            text = "  Breathe.  \n"

        class Models:
            def generate_content(self, **kwargs):
                return Response()

        class Client:
            models = Models()

        assert GeminiContentGenerator(client=Client()).generate("hello") == "Breathe."
