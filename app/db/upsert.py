"""
Dialect-aware ``INSERT ... ON CONFLICT`` builder.

PostgreSQL and SQLite share the ``on_conflict_do_update`` /
``on_conflict_do_nothing`` API; only the ``insert`` construct differs.
"""

from sqlalchemy.dialects import postgresql, sqlite
from sqlmodel import Session


def insert_for(session: Session, model):
    """Return a dialect-specific ``insert(model)`` supporting upserts."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Upsert not supported for dialect '{dialect}'")
