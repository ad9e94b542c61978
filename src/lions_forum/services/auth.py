"""Signup, login and logout.

The authenticator knows about credentials, sessions and the database, but not
about HTTP: it raises :mod:`lions_forum.core.errors` exceptions and returns
plain values. Cookie handling lives in the API layer.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lions_forum.core import security
from lions_forum.core.errors import Conflict, InvalidCredentials, ValidationError
from lions_forum.core.settings import settings
from lions_forum.db.session import storage_guard
from lions_forum.db.time import utcnow
from lions_forum.models.user import User
from lions_forum.repositories.session_repo import SessionRepository
from lions_forum.repositories.user_repo import UserRepository
from lions_forum.schemas.identity import IssuedSession

logger = logging.getLogger(__name__)


def _looks_like_email(email: str) -> bool:
    return "@" in email and "." in email


class Authenticator:
    """Validate credentials and mint or revoke login sessions."""

    def __init__(self, session: Session, *, session_ttl: timedelta | None = None) -> None:
        self.session = session
        self.users = UserRepository(session)
        self.sessions = SessionRepository(session)
        self.session_ttl = session_ttl or timedelta(days=settings.session_ttl_days)

    def signup(self, username: str, email: str, password: str) -> User:
        """Register a new user.

        Args:
            username: Desired public name; surrounding whitespace is ignored.
            email: Login email; surrounding whitespace is ignored.
            password: Plain text password, hashed with bcrypt before storage.

        Returns:
            The persisted user.

        Raises:
            ValidationError: If a field is missing, the email is malformed or the
                password is too long for bcrypt.
            Conflict: If the username or the email is already registered. The
                error does not say which.
            StorageError: If the database fails.
        """
        username = username.strip()
        email = email.strip()
        if not username or not email or not password:
            raise ValidationError("All fields are required")
        if not _looks_like_email(email):
            raise ValidationError("Invalid email address")

        try:
            password_hash = security.hash_password(password)
        except ValueError as err:
            raise ValidationError(str(err)) from err

        with storage_guard(self.session, "registering a user"):
            if self.users.identity_taken(username, email):
                raise Conflict()
            try:
                user = self.users.create(
                    username=username,
                    email=email,
                    password_hash=password_hash,
                )
                self.session.commit()
            except IntegrityError as err:
                # Lost a race with a concurrent signup for the same name or email.
                self.session.rollback()
                raise Conflict() from err

        logger.info("User %s registered (id=%d)", user.username, user.id)
        return user

    def login(self, email: str, password: str) -> IssuedSession:
        """Check credentials and open a new session.

        Raises:
            InvalidCredentials: Unknown email or wrong password.
            StorageError: If the database fails.
        """
        email = email.strip()
        with storage_guard(self.session, "looking up a login"):
            user = self.users.get_by_email(email) if email else None

        if user is None:
            security.burn_password_check(password)
            logger.info("Login rejected: unknown email")
            raise InvalidCredentials()
        if not security.verify_password(password, user.password_hash):
            logger.info("Login rejected: bad password for user id=%d", user.id)
            raise InvalidCredentials()

        token = security.new_session_token()
        expires_at = utcnow() + self.session_ttl
        with storage_guard(self.session, "creating a session"):
            self.sessions.create(token=token, user_id=user.id, expires_at=expires_at)
            self.session.commit()

        logger.info("User id=%d logged in", user.id)
        return IssuedSession(token=token, user_id=user.id, expires_at=expires_at)

    def logout(self, token: str | None) -> None:
        """Revoke the session for ``token``. Unknown or missing tokens are fine."""
        if not token:
            return
        with storage_guard(self.session, "revoking a session"):
            self.sessions.revoke(token)
            self.session.commit()
