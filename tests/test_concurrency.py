# tests/test_concurrency.py
"""Concurrent submissions against a file-backed database."""

from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import func, select

from lions_forum.core.errors import Conflict
from lions_forum.core.settings import settings
from lions_forum.db.session import Database, seed_categories
from lions_forum.models import Category, PostLike, User
from lions_forum.schemas.identity import Identity
from lions_forum.services.auth import Authenticator
from lions_forum.services.content import ContentService
from lions_forum.services.votes import VoteLedger

WORKERS = 8


@pytest.fixture()
def file_database(tmp_path) -> Iterator[Database]:
    db = Database(f"sqlite:///{tmp_path / 'forum.db'}")
    db.create_tables()
    seed_categories(db, settings.default_categories)
    try:
        yield db
    finally:
        db.dispose()


def _count(database: Database, model: type) -> int:
    with database.session() as session:
        return session.scalar(select(func.count()).select_from(model)) or 0


def test_double_submitted_votes_converge_to_one_row(file_database: Database) -> None:
    with file_database.session() as session:
        user = Authenticator(session).signup("voter", "voter@example.com", "pw")
        voter = Identity(user_id=user.id, username=user.username)
        general = session.scalar(select(Category.id).where(Category.name == "General"))
        post = ContentService(session).create_post(voter, general, "Race", "Who wins?")

    def vote(value: int) -> int:
        with file_database.session() as session:
            return VoteLedger(session).cast_or_retract(voter, "post", post.id, value)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(vote, [1, -1] * (WORKERS // 2)))

    assert set(results) == {1, -1}
    assert _count(file_database, PostLike) == 1
    with file_database.session() as session:
        stored = session.scalar(select(PostLike.value).where(PostLike.post_id == post.id))
    assert stored in (1, -1)


def test_racing_signups_register_exactly_one_user(file_database: Database) -> None:
    def signup(index: int) -> str:
        with file_database.session() as session:
            try:
                Authenticator(session).signup("twin", f"twin{index}@example.com", "pw")
            except Conflict:
                return "conflict"
            return "created"

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        outcomes = list(pool.map(signup, range(WORKERS)))

    assert outcomes.count("created") == 1
    assert outcomes.count("conflict") == WORKERS - 1
    assert _count(file_database, User) == 1
