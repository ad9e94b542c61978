"""HTTP layer for the forum."""

from .endpoints import auth_router, browse_router, posts_router, votes_router

__all__ = [
    "auth_router",
    "browse_router",
    "posts_router",
    "votes_router",
]
