"""
Custom exception classes.

Every API error carries a stable ``error_code`` next to the human-readable
``detail`` so clients can branch on it.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception with consistent structure."""

    def __init__(self, status_code: int, detail: str, error_code: Optional[str] = None,
                 headers: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class UnauthenticatedError(APIException):
    """No identifier could be resolved for the request."""

    def __init__(self, detail: str = "Authentication required. Please sign in again."):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, error_code="UNAUTHENTICATED")


class InvalidChallengeError(APIException):
    """Challenge id is not part of the catalog."""

    def __init__(self, challenge_id: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown challenge: '{challenge_id}'",
                         error_code="INVALID_CHALLENGE")
        self.challenge_id = challenge_id


class StorageUnavailableError(APIException):
    """The database could not be reached. Safe to retry."""

    def __init__(self, detail: str = "Storage temporarily unavailable, please retry"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail,
                         error_code="STORAGE_UNAVAILABLE", headers={ "Retry-After": "5" })


class ValidationError(APIException):
    """Request failed a business-level validation."""

    def __init__(self, detail: str, field: Optional[str] = None):
        error_code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail, error_code=error_code)


class InvalidOTPError(APIException):
    """Phone verification code is wrong or expired."""

    def __init__(self, detail: str = "OTP expired or invalid"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, error_code="INVALID_OTP")


class NotFoundError(APIException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found: {identifier}",
                         error_code="NOT_FOUND")


class ConflictError(APIException):
    """Resource conflict (e.g., duplicate entry)."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail, error_code="CONFLICT")


class ContentGenerationUnavailable(Exception):
    """The content generator failed or is not configured.

    Never surfaced to clients: callers catch it and fall back to static
    content.
    """
