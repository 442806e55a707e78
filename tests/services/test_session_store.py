"""Tests for the expiring session store."""

import datetime

from app.db.repositories.session_store import SessionStoreRepository

NOW = datetime.datetime(2026, 3, 15, 12, 0, 0)
TTL = datetime.timedelta(minutes=5)


class TestSessionStore:
    def test_put_and_get(self, db):
        store = SessionStoreRepository(db)
        store.put("sid-1", {"user_id": "u1"}, TTL, user_id="u1", now=NOW)
        record = store.get("sid-1", now=NOW)
        assert record.sess == {"user_id": "u1"}
        assert record.expire == NOW + TTL

    def test_put_replaces_payload_and_expiry(self, db):
        store = SessionStoreRepository(db)
        store.put("sid-1", {"v": 1}, TTL, now=NOW)
        store.put("sid-1", {"v": 2}, TTL, now=NOW + TTL)
        record = store.get("sid-1", now=NOW + TTL)
        assert record.sess == {"v": 2}

    def test_expired_entry_is_absent_and_removed(self, db):
        store = SessionStoreRepository(db)
        store.put("sid-1", {"v": 1}, TTL, now=NOW)
        assert store.get("sid-1", now=NOW + TTL) is None
        assert store.get("sid-1", now=NOW) is None

    def test_delete_by_user(self, db):
        store = SessionStoreRepository(db)
        store.put("a", {}, TTL, user_id="u1", now=NOW)
        store.put("b", {}, TTL, user_id="u1", now=NOW)
        store.put("c", {}, TTL, user_id="u2", now=NOW)
        assert store.delete_by_user("u1") == 2
        assert store.get("c", now=NOW) is not None

    def test_purge_expired(self, db):
        store = SessionStoreRepository(db)
        store.put("old", {}, TTL, now=NOW - 2 * TTL)
        store.put("live", {}, TTL, now=NOW)
        assert store.purge_expired(now=NOW) == 1
        assert store.get("live", now=NOW) is not None
