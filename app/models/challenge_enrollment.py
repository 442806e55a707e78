"""
Challenge enrollment model.

One row per user per challenge. Catalog data (title, duration, points...)
is not stored here; it is joined from :mod:`app.challenges.catalog`.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class ChallengeEnrollment(SQLModel, table=True):
    """A user's participation in one challenge.

    ``completed_count`` is a denormalized cache of the number of distinct
    completed days in ``challenge_daily_progress``; it is rewritten from
    the ledger after every completion, never incremented.
    """

    __tablename__ = "challenge_enrollments"
    __table_args__ = (UniqueConstraint("user_id", "challenge_id", name="uq_enrollment_user_challenge"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", ondelete="CASCADE", nullable=False, index=True, max_length=255)
    challenge_id: str = Field(nullable=False, max_length=64)

    start_date: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    last_activity_date: Optional[datetime.datetime] = Field(default=None)
    completed_count: int = Field(default=0, ge=0)
    is_active: bool = Field(default=True)
