"""
User API schemas.

Pydantic models for user-related request/response validation.
"""

import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel


# Request schemas
class OnboardingRequest(CamelModel):
    """Profile collected by the onboarding flow."""
    name: str = Field(..., min_length=1, max_length=255)
    age: Optional[str] = Field(None, max_length=16)
    wellness_goals: list[str] = Field(default_factory=list)
    preferred_time: Optional[str] = Field(None, max_length=64)
    motivation: Optional[str] = None


class LanguageUpdate(CamelModel):
    """Preferred conversation language (ISO 639-1 code)."""
    language: str = Field(..., min_length=2, max_length=8, pattern=r"^[a-zA-Z]{2,3}(-[a-zA-Z]{2,4})?$")


# Response schemas
class UserResponse(CamelModel):
    """User record as exposed to the client."""
    id: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    name: Optional[str] = None
    age: Optional[str] = None
    wellness_goals: Optional[list[str]] = None
    preferred_time: Optional[str] = None
    motivation: Optional[str] = None
    preferred_language: str = "en"
    onboarding_complete: bool = False
    created_at: datetime.datetime
    updated_at: datetime.datetime


class OnboardingResponse(CamelModel):
    success: bool = True
    user: UserResponse
