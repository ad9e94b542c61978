"""Session store: opaque login tokens bound to users."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lions_forum.models.user import User
from lions_forum.models.user_session import UserSession
from lions_forum.schemas.identity import Identity

__all__ = ["SessionRepository"]


class SessionRepository:
    """Create, resolve and revoke login sessions."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, token: str, user_id: int, expires_at: datetime) -> UserSession:
        row = UserSession(id=token, user_id=user_id, expires_at=expires_at)
        self.session.add(row)
        self.session.flush()
        return row

    def resolve(self, token: str, now: datetime) -> Identity | None:
        """Return the identity owning ``token`` if the session is still live.

        Expired rows are left in place; they just stop matching.
        """
        row = self.session.execute(
            select(User.id, User.username)
            .join(UserSession, UserSession.user_id == User.id)
            .where(UserSession.id == token, UserSession.expires_at > now)
        ).first()
        if row is None:
            return None
        return Identity(user_id=row.id, username=row.username)

    def revoke(self, token: str) -> int:
        """Delete the session row for ``token``; returns rows removed (0 or 1)."""
        result = self.session.execute(delete(UserSession).where(UserSession.id == token))
        return result.rowcount or 0
