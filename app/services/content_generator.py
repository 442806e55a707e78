"""
Content generator backed by Google Gemini.

``generate(prompt) -> text``. Every failure, including a missing API key,
is raised as :class:`ContentGenerationUnavailable`; callers recover locally
with static content.
"""

import logging
from functools import lru_cache
from typing import Optional, Protocol

from google import genai
from google.genai import types as genai_types

from app.core.config import settings
from app.core.exceptions import ContentGenerationUnavailable

logger = logging.getLogger(__name__)


class ContentGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        ...


class GeminiContentGenerator:
    """Synchronous Gemini text generation."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 client: Optional[genai.Client] = None):
        self.model = model or settings.GEMINI_MODEL
        api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        if client is not None:
            self.client = client
        elif api_key:
            self.client = genai.Client(api_key=api_key)
        else:
            self.client = None

    @property
    def configured(self) -> bool:
        return self.client is not None

    def generate(self, prompt: str) -> str:
        if self.client is None:
            raise ContentGenerationUnavailable("Gemini API key not configured")

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(
                    temperature=settings.GEMINI_TEMPERATURE,
                    max_output_tokens=settings.GEMINI_MAX_OUTPUT_TOKENS,
                ),
            )
        except Exception as exc:
            logger.warning("Gemini generation failed: %s: %s", type(exc).__name__, exc)
            raise ContentGenerationUnavailable(str(exc)) from exc

        text = (response.text or "").strip()
        if not text:
            raise ContentGenerationUnavailable("Empty response from Gemini")
        return text


@lru_cache
def get_content_generator() -> ContentGenerator:
    """FastAPI dependency returning the process-wide generator."""
    generator = GeminiContentGenerator()
    if not generator.configured:
        logger.info("GEMINI_API_KEY not set; generated content will use static fallbacks")
    return generator
