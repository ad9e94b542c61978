# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Iterator

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DEFAULT_CATEGORIES"] = '["General", "Fiction", "Poetry"]'

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lions_forum.core.settings import settings
from lions_forum.db.session import Database, seed_categories
from lions_forum.main import create_app
from lions_forum.models import Category, Post
from lions_forum.schemas.identity import Identity
from lions_forum.services.auth import Authenticator
from lions_forum.services.content import ContentService

TEST_DB_URL = "sqlite://"
PASSWORD = "correct horse battery staple"


@pytest.fixture()
def database() -> Iterator[Database]:
    """Fresh in-memory database per test, with the default categories."""
    db = Database(TEST_DB_URL)
    db.create_tables()
    seed_categories(db, settings.default_categories)
    try:
        yield db
    finally:
        db.drop_tables()
        db.dispose()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(database: Database) -> FastAPI:
    return create_app(database=database)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def category_id(database: Database) -> int:
    with database.session() as session:
        return session.scalar(select(Category.id).where(Category.name == "General"))


def _register(database: Database, username: str, email: str) -> Identity:
    with database.session() as session:
        user = Authenticator(session).signup(username, email, PASSWORD)
        return Identity(user_id=user.id, username=user.username)


@pytest.fixture()
def alice(database: Database) -> Identity:
    return _register(database, "alice", "alice@example.com")


@pytest.fixture()
def bob(database: Database) -> Identity:
    return _register(database, "bob", "bob@example.com")


@pytest.fixture()
def alice_post(database: Database, alice: Identity, category_id: int) -> Post:
    with database.session() as session:
        return ContentService(session).create_post(
            alice, category_id, "On Tolkien", "Thoughts on the Silmarillion."
        )


@pytest.fixture()
def password() -> str:
    return PASSWORD


@pytest.fixture()
def make_client(app: FastAPI) -> Iterator[Callable[[], TestClient]]:
    """Extra clients with their own cookie jars, for multi-user scenarios."""
    clients: list[TestClient] = []

    def _make() -> TestClient:
        test_client = TestClient(app, base_url="http://test")
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture()
def login(client: TestClient) -> Callable[..., TestClient]:
    """Log a client in by email; the session cookie stays in its jar.

    Uses the default ``client`` unless another one is passed as ``as_client``.
    """

    def _login(email: str, password: str = PASSWORD, as_client: TestClient | None = None) -> TestClient:
        client_ = as_client or client
        response = client_.post(
            "/login",
            data={"email": email, "password": password},
            follow_redirects=False,
        )
        assert response.status_code == 303, response.text
        return client_

    return _login


@pytest.fixture()
def count_rows(database: Database) -> Callable[..., int]:
    """Count rows of ``model`` matching ``filters`` using a fresh session."""

    def _count(model: type, *filters) -> int:
        with database.session() as session:
            return session.scalar(select(func.count()).select_from(model).where(*filters)) or 0

    return _count
