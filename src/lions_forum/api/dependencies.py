"""Shared API dependencies: database session, caller identity and services."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from lions_forum.core.settings import settings
from lions_forum.db.session import get_db, storage_guard
from lions_forum.db.time import utcnow
from lions_forum.repositories.session_repo import SessionRepository
from lions_forum.schemas.identity import Identity
from lions_forum.services.auth import Authenticator
from lions_forum.services.content import ContentService
from lions_forum.services.feed import ForumReader
from lions_forum.services.votes import VoteLedger

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def resolve_identity(request: Request, db: SessionDep) -> Identity | None:
    """Resolve the session cookie to the calling user.

    A missing cookie, an unknown token and an expired token all resolve to
    ``None`` (anonymous) without raising. Nothing is written: expired
    sessions are left in storage and simply no longer match.

    FastAPI evaluates this once per request and hands the same immutable
    value to every dependant of that request.
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    with storage_guard(db, "resolving a session"):
        return SessionRepository(db).resolve(token, utcnow())


# Type alias for the (optional) caller identity
IdentityDep = Annotated[Identity | None, Depends(resolve_identity)]


def get_authenticator(db: SessionDep) -> Authenticator:
    return Authenticator(db)


def get_content_service(db: SessionDep) -> ContentService:
    return ContentService(db)


def get_vote_ledger(db: SessionDep) -> VoteLedger:
    return VoteLedger(db)


def get_forum_reader(db: SessionDep) -> ForumReader:
    return ForumReader(db)


AuthenticatorDep = Annotated[Authenticator, Depends(get_authenticator)]
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
VoteLedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]
ForumReaderDep = Annotated[ForumReader, Depends(get_forum_reader)]
