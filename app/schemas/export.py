"""
User data export and integrity report schemas.
"""

import datetime
from typing import Optional

from app.schemas.base import CamelModel
from app.schemas.challenge import ActiveChallengeResponse, DailyProgressResponse
from app.schemas.user import UserResponse


class DataSnapshot(CamelModel):
    export_date: datetime.datetime
    total_enrollments: int
    total_progress_entries: int
    completed_challenges: int


class DataExportResponse(CamelModel):
    """Everything stored about one user."""
    user: UserResponse
    data_snapshot: DataSnapshot
    challenges: list[ActiveChallengeResponse]
    progress: list[DailyProgressResponse]


class IntegrityCounts(CamelModel):
    total_enrollments: int
    total_progress_entries: int
    last_updated: datetime.datetime
    account_created: datetime.datetime


class DataIntegrityResponse(CamelModel):
    """Row counts plus a check that every cached count matches the ledger."""
    user_id: str
    user_exists: bool
    data_integrity: IntegrityCounts
    drifted_challenges: list[str]
    status: str
    detail: Optional[str] = None
