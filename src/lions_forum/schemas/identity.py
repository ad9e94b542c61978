"""Caller identity values produced by session resolution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Identity:
    """Authenticated caller for the duration of one request."""

    user_id: int
    username: str


@dataclass(frozen=True)
class IssuedSession:
    """Session minted by a successful login."""

    token: str
    user_id: int
    expires_at: datetime
