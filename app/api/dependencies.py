"""
Shared API dependencies.

Reusable FastAPI dependencies for identity resolution and database access.
"""

from typing import Optional

from fastapi import Depends, Request, Response
from sqlmodel import Session

from app.core.config import settings
from app.db.session import get_db
from app.models.user import User
from app.services.identity_resolver import IdentityResolver, ResolvedIdentity


def get_session_token(request: Request) -> Optional[str]:
    """Opaque session token from the cookie, if the client sent one."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def set_session_cookie(response: Response, identity: ResolvedIdentity) -> None:
    response.set_cookie(key=settings.SESSION_COOKIE_NAME, value=identity.session_token,
                        max_age=settings.SESSION_TTL_MINUTES * 60, httponly=True, samesite="lax",
                        secure=settings.SESSION_COOKIE_SECURE, )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, httponly=True, samesite="lax",
                           secure=settings.SESSION_COOKIE_SECURE, )


def get_current_identity(request: Request, response: Response, db: Session = Depends(get_db), ) -> ResolvedIdentity:
    """Resolve the canonical identity from the session cookie and the user-id header."""
    token = get_session_token(request)
    identity = IdentityResolver(db).resolve(token, request.headers.get(settings.USER_ID_HEADER))
    if identity.session_token != token:
        set_session_cookie(response, identity)
    return identity


def get_current_user(identity: ResolvedIdentity = Depends(get_current_identity)) -> User:
    return identity.user
