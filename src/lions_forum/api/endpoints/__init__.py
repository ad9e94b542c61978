"""HTTP endpoint modules."""

from .auth import router as auth_router
from .browse import router as browse_router
from .posts import router as posts_router
from .votes import router as votes_router

__all__ = [
    "auth_router",
    "browse_router",
    "posts_router",
    "votes_router",
]
