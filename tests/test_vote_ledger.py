# tests/test_vote_ledger.py
"""Tests for casting, changing and retracting votes."""

import pytest

from lions_forum.core.errors import InvalidVoteValue, NotFound, Unauthorized, ValidationError
from lions_forum.models import PostLike
from lions_forum.services.content import ContentService
from lions_forum.services.votes import VoteLedger


def test_switching_vote_keeps_a_single_row(db_session, bob, alice_post, count_rows) -> None:
    ledger = VoteLedger(db_session)
    assert ledger.cast_or_retract(bob, "post", alice_post.id, 1) == 1
    assert ledger.cast_or_retract(bob, "post", alice_post.id, -1) == -1

    assert count_rows(PostLike, PostLike.post_id == alice_post.id) == 1
    assert ledger.viewer_value("post", alice_post.id, bob.user_id) == -1
    assert ledger.like_count("post", alice_post.id) == 0
    assert ledger.dislike_count("post", alice_post.id) == 1


def test_retract_removes_row(db_session, bob, alice_post, count_rows) -> None:
    ledger = VoteLedger(db_session)
    ledger.cast_or_retract(bob, "post", alice_post.id, 1)
    assert ledger.like_count("post", alice_post.id) == 1

    assert ledger.cast_or_retract(bob, "post", alice_post.id, 0) == 0

    assert count_rows(PostLike) == 0
    assert ledger.like_count("post", alice_post.id) == 0
    assert ledger.viewer_value("post", alice_post.id, bob.user_id) == 0


def test_retract_without_vote_is_not_an_error(db_session, bob, alice_post) -> None:
    assert VoteLedger(db_session).cast_or_retract(bob, "post", alice_post.id, 0) == 0


def test_repeat_vote_is_idempotent(db_session, bob, alice_post) -> None:
    ledger = VoteLedger(db_session)
    ledger.cast_or_retract(bob, "post", alice_post.id, 1)
    ledger.cast_or_retract(bob, "post", alice_post.id, 1)
    assert ledger.engagement_count("post", alice_post.id) == 1


def test_counts_across_voters(db_session, alice, bob, alice_post) -> None:
    ledger = VoteLedger(db_session)
    ledger.cast_or_retract(alice, "post", alice_post.id, 1)
    ledger.cast_or_retract(bob, "post", alice_post.id, -1)

    assert ledger.like_count("post", alice_post.id) == 1
    assert ledger.dislike_count("post", alice_post.id) == 1
    assert ledger.engagement_count("post", alice_post.id) == 2
    assert ledger.viewer_value("post", alice_post.id, None) == 0


def test_comment_votes_are_independent_of_post_votes(db_session, bob, alice_post) -> None:
    comment = ContentService(db_session).create_comment(bob, alice_post.id, "Agreed")
    ledger = VoteLedger(db_session)
    ledger.cast_or_retract(bob, "comment", comment.id, 1)

    assert ledger.like_count("comment", comment.id) == 1
    assert ledger.like_count("post", alice_post.id) == 0


@pytest.mark.parametrize("value", [2, -2, 5, True])
def test_invalid_value_is_rejected_before_storage(db_session, bob, alice_post, count_rows, value) -> None:
    with pytest.raises(InvalidVoteValue):
        VoteLedger(db_session).cast_or_retract(bob, "post", alice_post.id, value)
    assert count_rows(PostLike) == 0


def test_anonymous_vote_is_unauthorized(db_session, alice_post) -> None:
    with pytest.raises(Unauthorized):
        VoteLedger(db_session).cast_or_retract(None, "post", alice_post.id, 1)


def test_vote_on_missing_target(db_session, bob) -> None:
    with pytest.raises(NotFound):
        VoteLedger(db_session).cast_or_retract(bob, "post", 31337, 1)
    with pytest.raises(NotFound):
        VoteLedger(db_session).cast_or_retract(bob, "comment", 31337, -1)


def test_unknown_target_kind(db_session, bob, alice_post) -> None:
    with pytest.raises(ValidationError):
        VoteLedger(db_session).cast_or_retract(bob, "poll", alice_post.id, 1)  # type: ignore[arg-type]
