"""
Phone number login.

One-time codes are kept in the expiring session store under the
``otp:<phone>`` key, never in process memory, so verification works across
workers and restarts.
"""

import datetime
import logging
import secrets
from typing import Optional

from sqlmodel import Session

from app.core.config import settings
from app.core.exceptions import InvalidOTPError
from app.db.repositories.session_store import SessionStoreRepository
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.services.identity_resolver import NEW_USER_DEFAULTS, generate_user_id

logger = logging.getLogger(__name__)

OTP_KEY_PREFIX = "otp:"


def generate_otp() -> str:
    """Six-digit numeric code."""
    return str(100000 + secrets.randbelow(900000))


class PhoneLoginService:
    """Issues and verifies one-time phone codes."""

    def __init__(self, session: Session, ttl: Optional[datetime.timedelta] = None):
        self.users = UserRepository(session)
        self.store = SessionStoreRepository(session)
        self.ttl = ttl or datetime.timedelta(minutes=settings.OTP_TTL_MINUTES)

    def send_code(self, phone_number: str) -> str:
        """Issue a fresh code for *phone_number*, replacing any pending one."""
        code = generate_otp()
        self.store.put(self._key(phone_number), { "code": code, "phone_number": phone_number }, self.ttl)
        # TODO: hand the code to an SMS provider instead of the log.
        if settings.ENVIRONMENT != "production":
            logger.info("OTP for %s: %s", phone_number, code)
        return code

    def verify_code(self, phone_number: str, code: str) -> User:
        """Consume a valid code and return the phone's user, creating it if new.

        Raises:
            InvalidOTPError: No pending code, code expired, or mismatch.
        """
        record = self.store.get(self._key(phone_number))
        if record is None:
            raise InvalidOTPError()
        if not secrets.compare_digest(str(record.sess.get("code", "")), code):
            raise InvalidOTPError("Invalid OTP")

        self.store.delete(self._key(phone_number))

        user = self.users.get_by_phone(phone_number)
        if user is None:
            user = self.users.ensure_exists(generate_user_id(), phone_number=phone_number, **NEW_USER_DEFAULTS)
            logger.info("Created user %s for phone login", user.id)
        return user

    @staticmethod
    def _key(phone_number: str) -> str:
        return f"{OTP_KEY_PREFIX}{phone_number}"
