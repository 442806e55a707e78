"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.user import User  # noqa: F401
from app.models.session import SessionRecord  # noqa: F401
from app.models.challenge_enrollment import ChallengeEnrollment  # noqa: F401
from app.models.challenge_progress import ChallengeDailyProgress  # noqa: F401
