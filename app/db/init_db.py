"""
Database initialization.

Creates all tables. Production deployments should prefer
``alembic upgrade head``; this is for local development and SQLite.
"""

import logging

from sqlmodel import SQLModel

from app.db.session import engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Create all SQLModel tables that do not exist yet."""

    # Import all models so SQLModel.metadata has them
    import app.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created: %s", ", ".join(sorted(SQLModel.metadata.tables)))


if __name__ == "__main__":
    init_db()
