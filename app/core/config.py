"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "ZenMindful Wellness API"
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["ZenMindful Team"]
    AUTHORS_EMAILS: List[str] = ["N.A."]
    PROJECT_URL: str = "https://github.com/zenmindful/zenmindful-api"

    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # "text" or "json"

    # Database
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "postgres"

    # Full URL override, e.g. ``sqlite:///./zenmindful.db`` for local runs
    DATABASE_URL_OVERRIDE: Optional[str] = None

    # Sessions
    SESSION_COOKIE_NAME: str = "zm_session"
    SESSION_TTL_MINUTES: int = 24 * 60
    SESSION_COOKIE_SECURE: bool = False
    USER_ID_HEADER: str = "X-User-Id"

    # Phone login
    OTP_TTL_MINUTES: int = 5

    # Content generation (Google Gemini)
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TEMPERATURE: float = 0.7
    GEMINI_MAX_OUTPUT_TOKENS: int = 400

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}"
                f"/{self.DATABASE_DBNAME}")


# Global settings instance
settings = Settings()
