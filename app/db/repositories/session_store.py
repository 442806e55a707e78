"""
Session store repository.

Expiring key-value operations on the ``sessions`` table.
"""

import datetime
from typing import Optional

from sqlalchemy import delete
from sqlmodel import Session

from app.db.upsert import insert_for
from app.models.session import SessionRecord


class SessionStoreRepository:
    """Repository for the expiring ``sessions`` key-value table."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, sid: str, now: Optional[datetime.datetime] = None) -> Optional[SessionRecord]:
        """Return the live entry for *sid*, or ``None``.

        An expired entry is deleted on read and reported as absent.
        """
        now = now or datetime.datetime.utcnow()
        record = self.session.get(SessionRecord, sid, populate_existing=True)
        if record is None:
            return None
        if record.expire <= now:
            self.session.delete(record)
            self.session.commit()
            return None
        return record

    def put(self, sid: str, payload: dict, ttl: datetime.timedelta, user_id: Optional[str] = None,
            now: Optional[datetime.datetime] = None) -> SessionRecord:
        """Create or replace the entry for *sid* with a fresh expiry."""
        now = now or datetime.datetime.utcnow()
        expire = now + ttl
        statement = insert_for(self.session, SessionRecord).values(sid=sid, sess=payload, user_id=user_id,
                                                                   expire=expire)
        statement = statement.on_conflict_do_update(index_elements=[SessionRecord.sid],
                                                    set_={ "sess": payload, "user_id": user_id, "expire": expire })
        self.session.execute(statement)
        self.session.commit()
        return self.session.get(SessionRecord, sid, populate_existing=True)

    def delete(self, sid: str) -> bool:
        result = self.session.execute(delete(SessionRecord).where(SessionRecord.sid == sid))
        self.session.commit()
        return result.rowcount > 0

    def delete_by_user(self, user_id: str) -> int:
        """Remove every session bound to *user_id*. Returns the row count."""
        result = self.session.execute(delete(SessionRecord).where(SessionRecord.user_id == user_id))
        self.session.commit()
        return result.rowcount

    def purge_expired(self, now: Optional[datetime.datetime] = None) -> int:
        now = now or datetime.datetime.utcnow()
        result = self.session.execute(delete(SessionRecord).where(SessionRecord.expire <= now))
        self.session.commit()
        return result.rowcount
