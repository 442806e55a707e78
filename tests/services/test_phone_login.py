"""Tests for one-time phone codes kept in the session store."""

import datetime

import pytest

from app.core.exceptions import InvalidOTPError
from app.db.repositories.user import UserRepository
from app.services.phone_login_service import PhoneLoginService, generate_otp

PHONE = "+15550001111"


class TestGenerateOtp:
    def test_six_digits(self):
        for _ in range(50):
            code = generate_otp()
            assert len(code) == 6
            assert code.isdigit()


class TestPhoneLogin:
    def test_valid_code_creates_user(self, db):
        service = PhoneLoginService(db)
        code = service.send_code(PHONE)
        user = service.verify_code(PHONE, code)
        assert user.phone_number == PHONE
        assert user.id.startswith("user_")

    def test_existing_phone_user_is_reused(self, db):
        UserRepository(db).ensure_exists("u1", phone_number=PHONE)
        service = PhoneLoginService(db)
        user = service.verify_code(PHONE, service.send_code(PHONE))
        assert user.id == "u1"

    def test_code_is_consumed(self, db):
        service = PhoneLoginService(db)
        code = service.send_code(PHONE)
        service.verify_code(PHONE, code)
        with pytest.raises(InvalidOTPError):
            service.verify_code(PHONE, code)

    def test_wrong_code(self, db):
        service = PhoneLoginService(db)
        code = service.send_code(PHONE)
        wrong = "000000" if code != "000000" else "111111"
        with pytest.raises(InvalidOTPError):
            service.verify_code(PHONE, wrong)

    def test_expired_code(self, db):
        service = PhoneLoginService(db, ttl=datetime.timedelta(seconds=-1))
        code = service.send_code(PHONE)
        with pytest.raises(InvalidOTPError):
            service.verify_code(PHONE, code)

    def test_no_pending_code(self, db):
        with pytest.raises(InvalidOTPError):
            PhoneLoginService(db).verify_code(PHONE, "123456")
