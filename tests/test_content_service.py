# tests/test_content_service.py
"""Tests for ownership-guarded post and comment mutations."""

import pytest

from lions_forum.core.errors import ForbiddenOrNotFound, NotFound, Unauthorized, ValidationError
from lions_forum.models import Comment, CommentLike, Post, PostLike
from lions_forum.services.content import ContentService
from lions_forum.services.votes import VoteLedger


def test_create_post_is_owned_by_caller(db_session, alice, category_id) -> None:
    post = ContentService(db_session).create_post(
        alice, category_id, "  Dune  ", "Spice must flow.", image_ref="/static/uploads/dune.png"
    )
    assert post.user_id == alice.user_id
    assert post.title == "Dune"
    assert post.image == "/static/uploads/dune.png"


def test_anonymous_cannot_create(db_session, category_id, alice_post) -> None:
    service = ContentService(db_session)
    with pytest.raises(Unauthorized):
        service.create_post(None, category_id, "t", "c")
    with pytest.raises(Unauthorized):
        service.create_comment(None, alice_post.id, "hello")


@pytest.mark.parametrize(("title", "content"), [("", "body"), ("title", "   "), ("x" * 201, "body")])
def test_create_post_validation(db_session, alice, category_id, title, content) -> None:
    with pytest.raises(ValidationError):
        ContentService(db_session).create_post(alice, category_id, title, content)


def test_create_post_unknown_category(db_session, alice) -> None:
    with pytest.raises(ValidationError) as excinfo:
        ContentService(db_session).create_post(alice, 9999, "title", "body")
    assert excinfo.value.detail == "Unknown category"


def test_blank_comment_is_dropped(db_session, bob, alice_post, count_rows) -> None:
    assert ContentService(db_session).create_comment(bob, alice_post.id, "   \n ") is None
    assert count_rows(Comment) == 0


def test_comment_on_missing_post(db_session, bob) -> None:
    with pytest.raises(NotFound):
        ContentService(db_session).create_comment(bob, 424242, "hello?")


def test_non_owner_delete_matches_missing_delete(db_session, bob, alice_post, count_rows) -> None:
    service = ContentService(db_session)
    with pytest.raises(ForbiddenOrNotFound) as foreign:
        service.delete_post(bob, alice_post.id)
    with pytest.raises(ForbiddenOrNotFound) as missing:
        service.delete_post(bob, 999999)

    assert foreign.value.status_code == missing.value.status_code == 403
    assert foreign.value.detail == missing.value.detail
    assert count_rows(Post, Post.id == alice_post.id) == 1


def test_owner_delete_then_not_found(db_session, alice, bob, alice_post) -> None:
    service = ContentService(db_session)
    with pytest.raises(ForbiddenOrNotFound):
        service.delete_post(bob, alice_post.id)

    service.delete_post(alice, alice_post.id)

    with pytest.raises(ForbiddenOrNotFound):
        service.delete_post(alice, alice_post.id)


def test_deleting_post_cascades(db_session, alice, bob, alice_post, count_rows) -> None:
    content = ContentService(db_session)
    ledger = VoteLedger(db_session)
    comment = content.create_comment(bob, alice_post.id, "Nice one")
    ledger.cast_or_retract(bob, "post", alice_post.id, 1)
    ledger.cast_or_retract(alice, "comment", comment.id, -1)

    content.delete_post(alice, alice_post.id)

    assert count_rows(Comment) == 0
    assert count_rows(PostLike) == 0
    assert count_rows(CommentLike) == 0


def test_comment_delete_is_ownership_guarded(db_session, alice, bob, alice_post, count_rows) -> None:
    service = ContentService(db_session)
    comment = service.create_comment(bob, alice_post.id, "First!")

    with pytest.raises(ForbiddenOrNotFound) as excinfo:
        service.delete_comment(alice, comment.id)
    assert excinfo.value.detail == "You are not allowed to delete this comment."
    assert count_rows(Comment) == 1

    service.delete_comment(bob, comment.id)
    assert count_rows(Comment) == 0
