"""
User repository.

Handles database operations for User model.
"""

import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.db.upsert import insert_for
from app.models.user import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: External user identifier

        Returns:
            User instance if found, None otherwise
        """
        return self.session.get(User, user_id, populate_existing=True)

    def get_by_email(self, email: str) -> Optional[User]:
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def get_by_phone(self, phone_number: str) -> Optional[User]:
        statement = select(User).where(User.phone_number == phone_number)
        return self.session.exec(statement).first()

    def ensure_exists(self, user_id: str, **defaults) -> User:
        """
        Insert a minimal user row, or touch ``updated_at`` if it exists.

        A single ``INSERT ... ON CONFLICT (id) DO UPDATE`` statement, so two
        concurrent first requests for the same new id both succeed. Profile
        fields of an existing row are left untouched.

        Args:
            user_id: External user identifier
            **defaults: Column values used only when the row is created

        Returns:
            The persisted user
        """
        now = datetime.datetime.utcnow()
        statement = insert_for(self.session, User).values(id=user_id, created_at=now, updated_at=now, **defaults)
        statement = statement.on_conflict_do_update(index_elements=[User.id], set_={ "updated_at": now })
        self.session.execute(statement)
        self.session.commit()
        return self.get_by_id(user_id)

    def count(self) -> int:
        return self.session.exec(select(func.count()).select_from(User)).one()

    def update(self, user: User) -> User:
        """
        Update an existing user.

        Args:
            user: User instance with updated data

        Returns:
            Updated user
        """
        user.updated_at = datetime.datetime.utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def delete(self, user_id: str) -> bool:
        """
        Delete a user by ID.

        Dependent rows are removed by the database through
        ``ON DELETE CASCADE``.

        Args:
            user_id: User ID to delete

        Returns:
            True if deleted, False if not found
        """
        user = self.get_by_id(user_id)
        if user:
            self.session.delete(user)
            self.session.commit()
            return True
        return False
