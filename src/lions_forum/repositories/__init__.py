"""Repository layer: one class per table family, each bound to a Session."""

from .category_repo import CategoryRepository
from .comment_repo import CommentRepository
from .post_repo import PostRepository
from .session_repo import SessionRepository
from .user_repo import UserRepository
from .vote_repo import VoteKind, VoteRepository

__all__ = [
    "CategoryRepository",
    "CommentRepository",
    "PostRepository",
    "SessionRepository",
    "UserRepository",
    "VoteKind",
    "VoteRepository",
]
