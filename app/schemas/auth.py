"""
Identity API schemas.

Requests feeding the identity resolver and the responses it produces.
"""

from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.user import UserResponse


# Request schemas
class SessionRequest(CamelModel):
    """Identity bootstrap. ``user_id`` is the client's stored device id, if any."""
    user_id: Optional[str] = Field(None, max_length=255)


class RestoreRequest(CamelModel):
    """Explicit account restore on this device."""
    user_id: str = Field(..., min_length=1, max_length=255)


class NewUserRequest(CamelModel):
    """First app launch. ``device_id`` only seeds the generated identifier."""
    device_id: Optional[str] = Field(None, max_length=128)


class FederatedSyncRequest(CamelModel):
    """Profile pushed after the client signed in with an identity provider."""
    uid: str = Field(..., min_length=1, max_length=255, description="Provider subject id")
    email: Optional[str] = Field(None, max_length=255)
    first_name: Optional[str] = Field(None, max_length=255)
    last_name: Optional[str] = Field(None, max_length=255)
    profile_image_url: Optional[str] = None
    phone_number: Optional[str] = Field(None, max_length=32)


class PhoneOTPRequest(CamelModel):
    phone_number: str = Field(..., min_length=5, max_length=32)


class PhoneOTPVerify(CamelModel):
    phone_number: str = Field(..., min_length=5, max_length=32)
    otp: str = Field(..., min_length=6, max_length=6, pattern=r"^\d{6}$")


# Response schemas
class IdentityResponse(CamelModel):
    """Outcome of resolving or reconciling an identity."""
    success: bool = True
    user_id: str
    user: UserResponse
    is_returning: bool
    message: Optional[str] = None


class FederatedSyncResponse(IdentityResponse):
    needs_onboarding: bool


class MessageResponse(CamelModel):
    success: bool = True
    message: str
