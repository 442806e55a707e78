"""
Identity endpoints.

Thin adapters over the identity resolver: bootstrap, restore, new user,
federated sync, phone login, logout and reset.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from sqlmodel import Session

from app.api.dependencies import (
    clear_session_cookie,
    get_current_identity,
    get_current_user,
    get_session_token,
    set_session_cookie,
)
from app.core.config import settings
from app.db.session import get_db
from app.models.user import User
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
from app.schemas.user import UserResponse
from app.services.identity_resolver import IdentityResolver, ResolvedIdentity
from app.services.phone_login_service import PhoneLoginService
from app.services.user_service import UserService

router = APIRouter()


def _identity_response(identity: ResolvedIdentity, message: Optional[str] = None) -> IdentityResponse:
    return IdentityResponse(user_id=identity.user_id, user=UserResponse.model_validate(identity.user),
                            is_returning=identity.is_returning, message=message, )


@router.post("/session", summary="Identity bootstrap.", response_model=IdentityResponse)
def bootstrap_session(request: Request, response: Response, data: Optional[SessionRequest] = None,
                      db: Session = Depends(get_db), ):
    """
    Resolve who this connection belongs to.

    A live session wins. Otherwise the stored device id from the body (or the
    user-id header) is adopted and bound to a new session.

    Raises:
        HTTPException 401: No session and no identifier
    """
    token = get_session_token(request)
    asserted_id = (data.user_id if data else None) or request.headers.get(settings.USER_ID_HEADER)
    identity = IdentityResolver(db).resolve(token, asserted_id)
    if identity.session_token != token:
        set_session_cookie(response, identity)
    return _identity_response(identity)


@router.post("/restore", summary="Restore an existing account on this device.", response_model=IdentityResponse)
def restore_account(data: RestoreRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    """Rebind the session to ``userId``, replacing any current binding."""
    identity = IdentityResolver(db).reconcile(get_session_token(request), data.user_id)
    set_session_cookie(response, identity)
    message = "Welcome back! Your data has been restored." if identity.is_returning else "New account created."
    return _identity_response(identity, message)


@router.post("/new", summary="Create a brand-new user.", response_model=IdentityResponse)
def create_new_user(request: Request, response: Response, data: Optional[NewUserRequest] = None,
                    db: Session = Depends(get_db), ):
    identity = IdentityResolver(db).create_new(get_session_token(request), data.device_id if data else None)
    set_session_cookie(response, identity)
    return _identity_response(identity, "New account created.")


@router.post("/sync", summary="Sync a federated identity provider profile.", response_model=FederatedSyncResponse)
def sync_federated_user(data: FederatedSyncRequest, request: Request, response: Response,
                        db: Session = Depends(get_db), ):
    """
    Bind the session to the provider's subject id and store its profile.

    Raises:
        HTTPException 409: Email or phone number already linked to another user
    """
    service = UserService(db)
    service.check_federated_conflicts(data.uid, data)
    identity = IdentityResolver(db).reconcile(get_session_token(request), data.uid)
    set_session_cookie(response, identity)
    user = service.apply_federated_profile(identity.user, data)
    return FederatedSyncResponse(user_id=user.id, user=UserResponse.model_validate(user),
                                 is_returning=identity.is_returning, needs_onboarding=not user.onboarding_complete, )


@router.post("/phone/send-otp", summary="Send a one-time login code.", response_model=MessageResponse)
def send_otp(data: PhoneOTPRequest, db: Session = Depends(get_db)):
    PhoneLoginService(db).send_code(data.phone_number)
    return MessageResponse(message="OTP sent")


@router.post("/phone/verify-otp", summary="Verify a one-time login code.", response_model=IdentityResponse)
def verify_otp(data: PhoneOTPVerify, request: Request, response: Response, db: Session = Depends(get_db)):
    """
    Log in with a phone code.

    Raises:
        HTTPException 401: Code missing, expired or wrong
    """
    user = PhoneLoginService(db).verify_code(data.phone_number, data.otp)
    identity = IdentityResolver(db).reconcile(get_session_token(request), user.id)
    set_session_cookie(response, identity)
    return _identity_response(identity, "Phone verified.")


@router.get("/user", summary="Current user.", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.post("/logout", summary="End the current session.", response_model=MessageResponse)
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    IdentityResolver(db).logout(get_session_token(request))
    clear_session_cookie(response)
    return MessageResponse(message="Logged out")


@router.post("/reset", summary="Delete the current user and all of their data.", response_model=MessageResponse)
def reset_user(response: Response, identity: ResolvedIdentity = Depends(get_current_identity),
               db: Session = Depends(get_db), ):
    IdentityResolver(db).reset(identity.user_id)
    clear_session_cookie(response)
    return MessageResponse(message="User data reset")
