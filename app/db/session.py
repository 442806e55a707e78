"""
Database session management.

Provides SQLModel engine and session creation.
"""

from typing import Generator

from sqlalchemy import event
from sqlmodel import Session, create_engine

from app.core.config import settings

DATABASE_URL: str = settings.DATABASE_URL


def build_engine(url: str, **kwargs):
    """Create an engine for *url*.

    SQLite gets foreign keys switched on for every connection so
    ``ON DELETE CASCADE`` behaves as it does on PostgreSQL.
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", { "check_same_thread": False })
        sqlite_engine = create_engine(url, echo=settings.DEBUG, **kwargs)

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine

    return create_engine(
        url,
        echo=settings.DEBUG,  # Log SQL queries in debug mode
        pool_pre_ping=True,   # Verify connections before using
        pool_size=5,          # Connection pool size
        max_overflow=10,      # Max connections beyond pool_size
        **kwargs,
    )


engine = build_engine(DATABASE_URL)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Yields:
        SQLModel Session instance
    """
    with Session(engine) as session:
        yield session
