"""Database session configuration.

The process owns exactly one :class:`Database` (engine plus session factory).
The application lifespan constructs it, stores it on ``app.state`` and disposes
it at shutdown; request handlers receive short-lived ``Session`` objects from
:func:`get_db`.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, event, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lions_forum.core.errors import StorageError

logger = logging.getLogger(__name__)

_IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Store client: one engine and the session factory bound to it."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        engine_kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url in _IN_MEMORY_URLS:
                # Every connection to :memory: is a new database; share one.
                engine_kwargs["poolclass"] = StaticPool

        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    def session(self) -> Session:
        """Open a new ORM session."""
        return self.session_factory()

    def create_tables(self) -> None:
        """Create all database tables."""
        # Ensure model modules are imported so that metadata is populated.
        import lions_forum.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Release every pooled connection."""
        self.engine.dispose()


def seed_categories(database: Database, names: Iterable[str]) -> int:
    """Insert any of ``names`` that are not already categories.

    Returns:
        Number of categories created.
    """
    from lions_forum.models import Category

    created = 0
    with database.session() as db:
        existing = set(db.scalars(select(Category.name)))
        for name in names:
            if name not in existing:
                db.add(Category(name=name))
                existing.add(name)
                created += 1
        db.commit()
    if created:
        logger.info("Seeded %d categories", created)
    return created


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def storage_guard(db: Session, action: str) -> Iterator[None]:
    """Translate unexpected SQLAlchemy failures into :class:`StorageError`.

    The session is rolled back and the failure is logged with ``action`` as
    context. Domain errors raised inside the block pass through untouched.
    """
    try:
        yield
    except SQLAlchemyError as err:
        db.rollback()
        logger.error("Storage failure while %s", action, exc_info=True)
        raise StorageError() from err
