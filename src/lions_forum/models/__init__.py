# src/lions_forum/models/__init__.py
"""SQLAlchemy models for the Lions Forum application."""

from .category import Category
from .post import Comment, Post
from .user import User
from .user_session import UserSession
from .vote import CommentLike, PostLike

__all__ = [
    "Category",
    "Comment", "Post",
    "User",
    "UserSession",
    "CommentLike", "PostLike",
]
