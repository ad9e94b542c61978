# src/lions_forum/schemas/__init__.py
"""
Schemas for API responses and the typed caller identity.
"""

from .identity import Identity, IssuedSession
from .pages import CategoryPage, CreatePostPage, HomePage, PostPage, ProfilePage, SearchResults
from .post import CategoryResponse, CommentResponse, PostSummary

__all__ = [
    "Identity", "IssuedSession",
    "CategoryPage", "CreatePostPage", "HomePage", "PostPage", "ProfilePage", "SearchResults",
    "CategoryResponse", "CommentResponse", "PostSummary",
]
