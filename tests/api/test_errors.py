# tests/api/test_errors.py
"""Tests for the JSON error envelope and storage failure handling."""

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from lions_forum.core.errors import StorageError
from lions_forum.services.auth import Authenticator


def test_error_body_shape(client) -> None:
    response = client.get("/post/31337")
    body = response.json()
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert set(body) == {"detail", "code", "path", "timestamp"}
    assert body["path"] == "/post/31337"


def test_unknown_route_uses_envelope(client) -> None:
    response = client.get("/no/such/page")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "http_error"


def test_storage_failure_is_generic_500(app, alice, login, alice_post, monkeypatch) -> None:
    with TestClient(app, base_url="http://test") as client:
        login("alice@example.com", as_client=client)

        def broken(self, *args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr("lions_forum.repositories.vote_repo.VoteRepository.upsert", broken)
        response = client.post(
            "/like",
            data={"post_id": str(alice_post.id), "value": "1"},
            follow_redirects=False,
        )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["code"] == StorageError.code
    assert "disk" not in response.text


def test_signup_storage_failure_is_500(client, monkeypatch) -> None:
    def broken(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr("lions_forum.repositories.user_repo.UserRepository.identity_taken", broken)
    response = client.post(
        "/signup",
        data={"username": "frank", "email": "frank@example.com", "password": "pw"},
    )
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == StorageError.detail


def test_logout_survives_storage_failure(client, alice, login, monkeypatch) -> None:
    login("alice@example.com")

    def broken(self, token):
        raise OperationalError("DELETE", {}, Exception("gone"))

    monkeypatch.setattr("lions_forum.repositories.session_repo.SessionRepository.revoke", broken)
    response = client.post("/logout", follow_redirects=False)
    assert response.status_code == status.HTTP_303_SEE_OTHER


def test_unexpected_exception_is_generic_500(app, monkeypatch) -> None:
    def explode(self, identity):
        raise RuntimeError("kaboom")

    monkeypatch.setattr("lions_forum.services.feed.ForumReader.home", explode)
    with TestClient(app, base_url="http://test", raise_server_exceptions=False) as client:
        response = client.get("/")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["code"] == "internal_server_error"
    assert "kaboom" not in response.text


def test_login_storage_failure_raises_storage_error(db_session, monkeypatch) -> None:
    def broken(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("nope"))

    monkeypatch.setattr("lions_forum.repositories.user_repo.UserRepository.get_by_email", broken)
    with pytest.raises(StorageError) as excinfo:
        Authenticator(db_session).login("a@b.c", "pw")
    assert excinfo.value.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
