# src/lions_forum/main.py
"""Main entry point for the Lions Forum application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lions_forum.api import auth_router, browse_router, posts_router, votes_router
from lions_forum.api.errors import install_exception_handlers
from lions_forum.core.settings import settings
from lions_forum.db.session import Database, seed_categories

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """Build the application.

    Args:
        database: Store client to serve from. When omitted, one is built from
            ``settings`` at startup and disposed at shutdown; a caller-supplied
            client is left for the caller to dispose.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = database is None
        db = database or Database(settings.effective_database_url, echo=settings.sql_debug)
        db.create_tables()
        seed_categories(db, settings.default_categories)
        app.state.database = db
        logger.info("%s %s started", settings.app_name, settings.app_version)
        try:
            yield
        finally:
            if owned:
                db.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="Discussion forum with sessions, ownership-guarded edits and votes",
        version=settings.app_version,
        lifespan=lifespan,
    )
    install_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(posts_router)
    app.include_router(votes_router)
    app.include_router(browse_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


logging.basicConfig(level=settings.log_level.upper())

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("lions_forum.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
