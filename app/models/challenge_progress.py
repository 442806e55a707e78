"""
Daily challenge progress model (the progress ledger).

One row per (challenge, user, calendar day), enforced by the composite
primary key. Rows are written by upsert with ``completed = true``.
"""

import datetime

from sqlmodel import Field, SQLModel


class ChallengeDailyProgress(SQLModel, table=True):
    """A single day's completion fact for one enrollment."""

    __tablename__ = "challenge_daily_progress"

    challenge_id: str = Field(primary_key=True, max_length=64)
    user_id: str = Field(primary_key=True, foreign_key="users.id", ondelete="CASCADE", max_length=255)
    date: datetime.date = Field(primary_key=True)

    completed: bool = Field(default=False, nullable=False)
