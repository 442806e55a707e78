"""
User database model.

Defines the users table. The primary key is a stable external identifier:
a client-generated device id, a federated provider subject id, or an id
fabricated by an explicit "create new user" entry point.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """
    Canonical user record.

    Every other table references ``users.id`` with ``ON DELETE CASCADE``.
    """
    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=255)
    email: Optional[str] = Field(default=None, unique=True, index=True, max_length=255)
    phone_number: Optional[str] = Field(default=None, unique=True, index=True, max_length=32)

    # Profile
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    profile_image_url: Optional[str] = Field(default=None)

    # Onboarding
    name: Optional[str] = Field(default=None, max_length=255)
    age: Optional[str] = Field(default=None, max_length=16)
    wellness_goals: Optional[list] = Field(default=None, sa_column=Column(JSON, nullable=True))
    preferred_time: Optional[str] = Field(default=None, max_length=64)
    motivation: Optional[str] = Field(default=None)
    preferred_language: str = Field(default="en", max_length=8)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def onboarding_complete(self) -> bool:
        return bool(self.age and self.wellness_goals and self.motivation and self.preferred_time)
