"""Credential store: data access for registered users."""
from __future__ import annotations

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from lions_forum.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_email(self, email: str) -> User | None:
        return self.session.scalars(select(User).where(User.email == email)).first()

    def get_by_username(self, username: str) -> User | None:
        return self.session.scalars(select(User).where(User.username == username)).first()

    def find_username(self, name: str) -> str | None:
        """Return the stored spelling of ``name`` matched case-insensitively."""
        return self.session.scalars(
            select(User.username).where(func.lower(User.username) == name.lower())
        ).first()

    def identity_taken(self, username: str, email: str) -> bool:
        """Return True if either the username or the email is already registered."""
        count = self.session.scalar(
            select(func.count())
            .select_from(User)
            .where(or_(User.email == email, User.username == username))
        )
        return bool(count)

    def create(self, *, username: str, email: str, password_hash: str) -> User:
        """Insert a new user and flush so the primary key is assigned."""
        user = User(username=username, email=email, password_hash=password_hash)
        self.session.add(user)
        self.session.flush()
        return user
