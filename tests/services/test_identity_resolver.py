"""Tests for identity resolution and session binding on SQLite."""

import datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import StorageUnavailableError, UnauthenticatedError, ValidationError
from app.db.repositories.session_store import SessionStoreRepository
from app.db.repositories.user import UserRepository
from app.services.identity_resolver import IdentityResolver, clean_identifier, generate_user_id


@pytest.fixture
def resolver(db):
    return IdentityResolver(db)


# ======================================================================
# Identifier helpers
# ======================================================================


class TestCleanIdentifier:
    @pytest.mark.parametrize("value", [None, "", "  ", "undefined", "null", "None"])
    def test_absent_values(self, value):
        assert clean_identifier(value) is None

    def test_strips_whitespace(self):
        assert clean_identifier("  device-1 ") == "device-1"

    def test_too_long(self):
        with pytest.raises(ValidationError):
            clean_identifier("x" * 256)


class TestGenerateUserId:
    def test_random_suffix(self):
        user_id = generate_user_id()
        prefix, millis, suffix = user_id.split("_")
        assert prefix == "user"
        assert millis.isdigit()
        assert len(suffix) == 9

    def test_seeded_by_device(self):
        assert generate_user_id("abc").startswith("user_abc_")

    def test_unique(self):
        assert generate_user_id() != generate_user_id()


# ======================================================================
# resolve
# ======================================================================


class TestResolve:
    def test_no_session_no_identifier_is_unauthenticated(self, resolver, db):
        with pytest.raises(UnauthenticatedError):
            resolver.resolve(None, None)
        assert UserRepository(db).count() == 0

    def test_asserted_id_creates_and_binds(self, resolver):
        identity = resolver.resolve(None, "device-1")
        assert identity.user_id == "device-1"
        assert identity.is_returning is False
        assert identity.user.first_name == "New User"
        assert resolver.session_user_id(identity.session_token) == "device-1"

    def test_existing_user_is_returning(self, resolver):
        resolver.resolve(None, "device-1")
        identity = resolver.resolve(None, "device-1")
        assert identity.is_returning is True

    def test_session_identity_wins_over_header(self, resolver):
        first = resolver.resolve(None, "device-1")
        second = resolver.resolve(first.session_token, "device-2")
        assert second.user_id == "device-1"
        assert second.session_token == first.session_token
        assert UserRepository(resolver.users.session).get_by_id("device-2") is None

    def test_session_alone_is_enough(self, resolver):
        first = resolver.resolve(None, "device-1")
        assert resolver.resolve(first.session_token, None).user_id == "device-1"

    def test_stable_across_many_requests(self, resolver):
        token = resolver.resolve(None, "device-1").session_token
        for asserted in ("device-2", None, "undefined", "device-1"):
            assert resolver.resolve(token, asserted).user_id == "device-1"

    def test_expired_session_falls_back_to_identifier(self, db):
        resolver = IdentityResolver(db, ttl=datetime.timedelta(seconds=-1))
        first = resolver.resolve(None, "device-1")
        second = resolver.resolve(first.session_token, "device-2")
        assert second.user_id == "device-2"
        assert second.session_token != first.session_token

    def test_unknown_token_without_identifier(self, resolver):
        with pytest.raises(UnauthenticatedError):
            resolver.resolve("forged-token", None)

    def test_unknown_token_is_never_adopted(self, resolver):
        identity = resolver.resolve("client-chosen", "device-1")
        assert identity.session_token != "client-chosen"

    def test_storage_failure_surfaces_as_unavailable(self, resolver, db, monkeypatch):
        def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        monkeypatch.setattr(resolver.sessions, "get", broken)
        with pytest.raises(StorageUnavailableError):
            resolver.resolve("some-token", "device-1")
        assert UserRepository(db).count() == 0


# ======================================================================
# reconcile / create_new / logout / reset
# ======================================================================


class TestReconcile:
    def test_overrides_existing_binding(self, resolver):
        first = resolver.resolve(None, "device-1")
        restored = resolver.reconcile(first.session_token, "device-2")
        assert restored.user_id == "device-2"
        assert restored.session_token != first.session_token
        assert resolver.session_user_id(first.session_token) is None
        assert resolver.resolve(restored.session_token, None).user_id == "device-2"

    def test_reports_returning_user(self, resolver):
        resolver.resolve(None, "device-1")
        assert resolver.reconcile(None, "device-1").is_returning is True
        assert resolver.reconcile(None, "device-9").is_returning is False

    def test_defaults_only_apply_on_create(self, resolver):
        resolver.reconcile(None, "u1", first_name="Ada")
        again = resolver.reconcile(None, "u1", first_name="Grace")
        assert again.user.first_name == "Ada"

    def test_requires_identifier(self, resolver):
        with pytest.raises(ValidationError):
            resolver.reconcile(None, "null")


class TestCreateNew:
    def test_fabricates_and_binds(self, resolver):
        identity = resolver.create_new(None, device_id="phone")
        assert identity.user_id.startswith("user_phone_")
        assert identity.is_returning is False
        assert resolver.session_user_id(identity.session_token) == identity.user_id


class TestLogoutAndReset:
    def test_logout_destroys_binding(self, resolver):
        identity = resolver.resolve(None, "device-1")
        assert resolver.logout(identity.session_token) is True
        assert resolver.session_user_id(identity.session_token) is None
        assert resolver.logout(identity.session_token) is False

    def test_reset_deletes_user_and_sessions(self, resolver, db):
        first = resolver.resolve(None, "device-1")
        second = resolver.reconcile(None, "device-1")
        assert resolver.reset("device-1") is True
        assert UserRepository(db).get_by_id("device-1") is None
        store = SessionStoreRepository(db)
        assert store.get(first.session_token) is None
        assert store.get(second.session_token) is None
