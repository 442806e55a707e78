"""
Challenge API schemas.

Catalog entries, enrollment records and ledger-derived progress.
"""

import datetime
from typing import Optional

from pydantic import Field

from app.challenges.catalog import ChallengeType, Difficulty
from app.schemas.base import CamelModel


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class ChallengeResponse(CamelModel):
    """A catalog entry."""
    challenge_id: str
    title: str
    description: str
    duration: int
    type: ChallengeType
    difficulty: Difficulty
    points: int
    icon: str


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class JoinChallengeRequest(CamelModel):
    challenge_id: str = Field(..., min_length=1, max_length=64)


class ProgressUpdateRequest(CamelModel):
    """Mark a day of a challenge as done.

    ``date`` is the caller's local calendar day (YYYY-MM-DD). It is stored
    as given; no timezone normalisation is applied.
    """
    challenge_id: str = Field(..., min_length=1, max_length=64)
    completed: bool
    date: Optional[datetime.date] = Field(None, description="Calendar day, defaults to today")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class EnrollmentResponse(CamelModel):
    """An enrollment row joined with its catalog entry."""
    id: int
    user_id: str
    challenge_id: str
    start_date: datetime.datetime
    last_activity_date: Optional[datetime.datetime] = None
    completed_count: int
    is_active: bool
    challenge: ChallengeResponse


class ProgressResponse(CamelModel):
    """Ledger-derived progress for one enrollment."""
    challenge_id: str
    completed_count: int
    duration: int
    is_complete: bool
    current_streak: int
    longest_streak: int
    start_date: Optional[datetime.datetime] = None
    last_activity_date: Optional[datetime.datetime] = None
    last_completed_date: Optional[datetime.date] = None


class ActiveChallengeResponse(ProgressResponse):
    challenge: ChallengeResponse


class CompletedChallengeResponse(CamelModel):
    challenge: ChallengeResponse
    completed_count: int
    points: int
    completed_at: Optional[datetime.date] = Field(None, description="Most recent completed day")


class DailyProgressResponse(CamelModel):
    challenge_id: str
    date: datetime.date
    completed: bool
