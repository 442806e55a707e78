"""
Identity resolver.

Decides which user a request belongs to. Inputs are the identifier bound to
the server-side session (if any) and an identifier supplied out of band by
the client (header or body, typically a device id kept in local storage).

Resolution order, first match wins:

1. The session's identifier. A different out-of-band identifier on the same
   live session is ignored, so a stale client can never pull another
   account's data into this session.
2. The out-of-band identifier, which is then bound to the session. This is
   how a client with local state but no cookie re-establishes itself.
3. Otherwise ``UNAUTHENTICATED``. Read paths never invent an identity.

Whatever identifier wins, a minimal ``users`` row is guaranteed to exist for
it before the request continues. :meth:`IdentityResolver.reconcile` is the
only operation that replaces an existing session binding.
"""

import datetime
import logging
import secrets
import string
import time
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlmodel import Session

from app.core.config import settings
from app.core.exceptions import StorageUnavailableError, UnauthenticatedError, ValidationError
from app.db.repositories.session_store import SessionStoreRepository
from app.db.repositories.user import UserRepository
from app.models.user import User

logger = logging.getLogger(__name__)

# Values a careless client serialises when it has no id at all.
_ABSENT_IDENTIFIERS = frozenset({ "", "undefined", "null", "none" })
_MAX_IDENTIFIER_LENGTH = 255
_ID_ALPHABET = string.ascii_lowercase + string.digits

NEW_USER_DEFAULTS = { "first_name": "New User", "last_name": "" }


@dataclass
class ResolvedIdentity:
    """Canonical identity for one request."""
    user: User
    is_returning: bool
    session_token: str

    @property
    def user_id(self) -> str:
        return self.user.id


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def generate_user_id(device_id: Optional[str] = None) -> str:
    """Fabricate a fresh user identifier.

    Only explicit "create a new user" entry points may call this.
    """
    millis = int(time.time() * 1000)
    if device_id:
        return f"user_{device_id}_{millis}"
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"user_{millis}_{suffix}"


def clean_identifier(value: Optional[str]) -> Optional[str]:
    """Normalise a client-supplied identifier; ``None`` if it is absent."""
    if value is None:
        return None
    value = value.strip()
    if value.lower() in _ABSENT_IDENTIFIERS:
        return None
    if len(value) > _MAX_IDENTIFIER_LENGTH:
        raise ValidationError("User identifier is too long", field="user_id")
    return value


class IdentityResolver:
    """Resolves, binds and releases the canonical identity of a connection."""

    SESSION_KEY = "user_id"

    def __init__(self, session: Session, ttl: Optional[datetime.timedelta] = None):
        self.users = UserRepository(session)
        self.sessions = SessionStoreRepository(session)
        self.ttl = ttl or datetime.timedelta(minutes=settings.SESSION_TTL_MINUTES)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, session_token: Optional[str], asserted_id: Optional[str]) -> ResolvedIdentity:
        """Pick the canonical identifier for a request.

        Args:
            session_token: Opaque token from the session cookie, if any.
            asserted_id: Identifier supplied by the client out of band.

        Raises:
            UnauthenticatedError: Neither source carries an identifier.
            StorageUnavailableError: The store could not be reached.
        """
        asserted_id = clean_identifier(asserted_id)
        try:
            bound_id = self.session_user_id(session_token)
            if bound_id:
                if asserted_id and asserted_id != bound_id:
                    logger.warning("Ignoring out-of-band identifier %s on session bound to %s", asserted_id,
                                   bound_id)
                user, existed = self._ensure_user(bound_id)
                return ResolvedIdentity(user=user, is_returning=existed, session_token=session_token)

            if not asserted_id:
                raise UnauthenticatedError()

            user, existed = self._ensure_user(asserted_id)
            token = self._bind(session_token, user.id)
            return ResolvedIdentity(user=user, is_returning=existed, session_token=token)
        except (OperationalError, InterfaceError) as exc:
            logger.error("Identity store unavailable during resolve: %s", exc)
            raise StorageUnavailableError() from exc

    def reconcile(self, session_token: Optional[str], asserted_id: Optional[str],
                  **defaults) -> ResolvedIdentity:
        """Switch this connection to *asserted_id*, creating the user if needed.

        ``is_returning`` tells the caller whether existing data was restored.
        ``defaults`` are applied only when the user row is created.
        """
        asserted_id = clean_identifier(asserted_id)
        if not asserted_id:
            raise ValidationError("A user identifier is required", field="user_id")
        try:
            user, existed = self._ensure_user(asserted_id, **defaults)
            token = self._bind(session_token, user.id)
        except (OperationalError, InterfaceError) as exc:
            logger.error("Identity store unavailable during reconcile: %s", exc)
            raise StorageUnavailableError() from exc
        logger.info("Session reconciled to %s user %s", "returning" if existed else "new", user.id)
        return ResolvedIdentity(user=user, is_returning=existed, session_token=token)

    def create_new(self, session_token: Optional[str], device_id: Optional[str] = None,
                   **defaults) -> ResolvedIdentity:
        """Fabricate a brand-new identity and bind it to the connection."""
        return self.reconcile(session_token, generate_user_id(clean_identifier(device_id)), **defaults)

    def session_user_id(self, session_token: Optional[str]) -> Optional[str]:
        """Identifier bound to a live session, or ``None``."""
        if not session_token:
            return None
        record = self.sessions.get(session_token)
        if record is None:
            return None
        return record.sess.get(self.SESSION_KEY)

    def logout(self, session_token: Optional[str]) -> bool:
        """Destroy the session binding. Returns ``False`` if none existed."""
        if not session_token:
            return False
        return self.sessions.delete(session_token)

    def reset(self, user_id: str) -> bool:
        """Delete the user, every dependent row and every session bound to it."""
        deleted = self.users.delete(user_id)
        purged = self.sessions.delete_by_user(user_id)
        logger.info("Reset user %s (deleted=%s, sessions purged=%d)", user_id, deleted, purged)
        return deleted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_user(self, user_id: str, **defaults) -> tuple[User, bool]:
        existed = self.users.get_by_id(user_id) is not None
        values = { **NEW_USER_DEFAULTS, **defaults }
        user = self.users.ensure_exists(user_id, **values)
        if not existed:
            logger.info("Created user %s", user_id)
        return user, existed

    def _bind(self, session_token: Optional[str], user_id: str) -> str:
        # A binding always gets a fresh token; client-chosen tokens are never adopted.
        if session_token:
            self.sessions.delete(session_token)
        self.sessions.purge_expired()
        token = new_session_token()
        self.sessions.put(token, { self.SESSION_KEY: user_id }, self.ttl, user_id=user_id)
        return token
