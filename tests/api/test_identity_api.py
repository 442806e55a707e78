"""HTTP tests for the identity endpoints."""

from sqlmodel import Session

from app.core.config import settings
from app.db.repositories.user import UserRepository
from app.services import phone_login_service

HEADER = settings.USER_ID_HEADER


class TestBootstrap:
    def test_unauthenticated(self, client):
        response = client.post("/api/v1/auth/session", json={})
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHENTICATED"

    def test_body_user_id_creates_user_and_sets_cookie(self, client):
        response = client.post("/api/v1/auth/session", json={"userId": "device-1"})
        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == "device-1"
        assert body["isReturning"] is False
        assert body["user"]["firstName"] == "New User"
        assert settings.SESSION_COOKIE_NAME in response.cookies

    def test_header_is_accepted(self, client):
        response = client.post("/api/v1/auth/session", headers={HEADER: "device-1"})
        assert response.json()["userId"] == "device-1"

    def test_session_wins_over_later_identifier(self, client):
        client.post("/api/v1/auth/session", json={"userId": "device-1"})
        response = client.post("/api/v1/auth/session", json={"userId": "device-2"})
        assert response.json()["userId"] == "device-1"
        assert response.json()["isReturning"] is True


class TestRestoreAndNew:
    def test_restore_switches_account(self, client):
        client.post("/api/v1/auth/session", json={"userId": "device-1"})
        response = client.post("/api/v1/auth/restore", json={"userId": "device-2"})
        assert response.json()["userId"] == "device-2"
        assert client.get("/api/v1/auth/user").json()["id"] == "device-2"

    def test_restore_requires_user_id(self, client):
        assert client.post("/api/v1/auth/restore", json={}).status_code == 422

    def test_new_user(self, client):
        response = client.post("/api/v1/auth/new", json={"deviceId": "tablet"})
        body = response.json()
        assert body["userId"].startswith("user_tablet_")
        assert body["isReturning"] is False
        assert client.get("/api/v1/auth/user").json()["id"] == body["userId"]


class TestFederatedSync:
    def test_sync_creates_profile(self, client):
        response = client.post("/api/v1/auth/sync", json={"uid": "provider-123", "email": "ada@example.com",
                                                          "firstName": "Ada", "lastName": "Lovelace"})
        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == "provider-123"
        assert body["user"]["email"] == "ada@example.com"
        assert body["needsOnboarding"] is True

    def test_email_conflict(self, client):
        client.post("/api/v1/auth/sync", json={"uid": "a", "email": "ada@example.com"})
        response = client.post("/api/v1/auth/sync", json={"uid": "b", "email": "ada@example.com"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "CONFLICT"

    def test_conflict_keeps_existing_session_and_creates_nothing(self, client, engine):
        client.post("/api/v1/auth/sync", json={"uid": "a", "email": "ada@example.com"})
        client.post("/api/v1/auth/restore", json={"userId": "device-1"})

        response = client.post("/api/v1/auth/sync", json={"uid": "b", "email": "ada@example.com"})
        assert response.status_code == 409

        assert client.get("/api/v1/auth/user").json()["id"] == "device-1"
        with Session(engine) as session:
            assert UserRepository(session).get_by_id("b") is None


class TestPhoneLogin:
    def test_send_and_verify(self, client, monkeypatch):
        sent = {}
        original = phone_login_service.generate_otp

        def capture():
            sent["code"] = original()
            return sent["code"]

        monkeypatch.setattr(phone_login_service, "generate_otp", capture)
        assert client.post("/api/v1/auth/phone/send-otp", json={"phoneNumber": "+15550001111"}).status_code == 200

        response = client.post("/api/v1/auth/phone/verify-otp",
                               json={"phoneNumber": "+15550001111", "otp": sent["code"]})
        assert response.status_code == 200
        assert response.json()["user"]["phoneNumber"] == "+15550001111"

    def test_wrong_code(self, client):
        client.post("/api/v1/auth/phone/send-otp", json={"phoneNumber": "+15550001111"})
        response = client.post("/api/v1/auth/phone/verify-otp", json={"phoneNumber": "+15550002222",
                                                                      "otp": "123456"})
        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_OTP"


class TestLogoutAndReset:
    def test_logout(self, client):
        client.post("/api/v1/auth/session", json={"userId": "device-1"})
        assert client.post("/api/v1/auth/logout").status_code == 200
        assert client.get("/api/v1/auth/user").status_code == 401

    def test_reset_deletes_everything(self, client):
        client.post("/api/v1/auth/session", json={"userId": "device-1"})
        client.post("/api/v1/challenges/progress", json={"challengeId": "mindful-week", "completed": True})
        assert client.post("/api/v1/auth/reset").status_code == 200

        response = client.post("/api/v1/auth/session", json={"userId": "device-1"})
        assert response.json()["isReturning"] is False
        assert client.get("/api/v1/challenges/active").json() == []
