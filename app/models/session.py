"""
Server-side session store model.

An expiring key-value table. Bound browser sessions are keyed by their
cookie token and hold ``{"user_id": ...}``; one-time phone codes live
under the ``otp:`` key prefix. Rows past ``expire`` are treated as absent.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class SessionRecord(SQLModel, table=True):
    """One expiring entry in the session store."""

    __tablename__ = "sessions"

    sid: str = Field(primary_key=True, max_length=255)
    sess: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    # Not a foreign key: lets a user's sessions be purged on reset without
    # parsing the JSON payload.
    user_id: Optional[str] = Field(default=None, index=True, max_length=255)

    expire: datetime.datetime = Field(nullable=False, index=True)
