"""Business logic services for the Lions Forum application."""

from .auth import Authenticator
from .content import ContentService
from .feed import ForumReader, SearchRedirect
from .votes import VoteLedger

__all__ = [
    "Authenticator",
    "ContentService",
    "ForumReader",
    "SearchRedirect",
    "VoteLedger",
]
