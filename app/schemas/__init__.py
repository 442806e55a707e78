"""Pydantic schemas for request/response validation."""

from app.schemas.auth import (
    FederatedSyncRequest,
    FederatedSyncResponse,
    IdentityResponse,
    MessageResponse,
    NewUserRequest,
    PhoneOTPRequest,
    PhoneOTPVerify,
    RestoreRequest,
    SessionRequest,
)
from app.schemas.challenge import (
    ActiveChallengeResponse,
    ChallengeResponse,
    CompletedChallengeResponse,
    DailyProgressResponse,
    EnrollmentResponse,
    JoinChallengeRequest,
    ProgressResponse,
    ProgressUpdateRequest,
)
from app.schemas.export import DataExportResponse, DataIntegrityResponse
from app.schemas.user import LanguageUpdate, OnboardingRequest, OnboardingResponse, UserResponse
from app.schemas.wellness import DailyTipResponse, ThoughtInterruptionResponse

__all__ = [
    "FederatedSyncRequest",
    "FederatedSyncResponse",
    "IdentityResponse",
    "MessageResponse",
    "NewUserRequest",
    "PhoneOTPRequest",
    "PhoneOTPVerify",
    "RestoreRequest",
    "SessionRequest",
    "ActiveChallengeResponse",
    "ChallengeResponse",
    "CompletedChallengeResponse",
    "DailyProgressResponse",
    "EnrollmentResponse",
    "JoinChallengeRequest",
    "ProgressResponse",
    "ProgressUpdateRequest",
    "DataExportResponse",
    "DataIntegrityResponse",
    "LanguageUpdate",
    "OnboardingRequest",
    "OnboardingResponse",
    "UserResponse",
    "DailyTipResponse",
    "ThoughtInterruptionResponse",
]
