"""Like/dislike endpoints for posts and comments."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Form, Header
from fastapi.responses import RedirectResponse

from lions_forum.api.dependencies import IdentityDep, VoteLedgerDep
from lions_forum.api.responses import parse_int, referer_path, safe_return_path, see_other
from lions_forum.core.errors import InvalidVoteValue, Unauthorized

router = APIRouter(tags=["votes"])

FormField = Annotated[str, Form()]


@router.post("/like", response_model=None)
def like_post(
    identity: IdentityDep,
    ledger: VoteLedgerDep,
    post_id: FormField = "",
    value: FormField = "",
    return_to: FormField = "",
) -> RedirectResponse:
    """Like (1), dislike (-1) or clear (0) the caller's vote on a post."""
    if identity is None:
        raise Unauthorized("You must be logged in to like/dislike")
    ledger.cast_or_retract(
        identity,
        "post",
        parse_int(post_id, "Invalid post_id"),
        parse_int(value, InvalidVoteValue.detail),
    )
    return see_other(safe_return_path(return_to))


@router.post("/comment-like", response_model=None)
def like_comment(
    identity: IdentityDep,
    ledger: VoteLedgerDep,
    comment_id: FormField = "",
    value: FormField = "",
    return_to: FormField = "",
    referer: Annotated[str | None, Header()] = None,
) -> RedirectResponse:
    """Vote on a comment and go back to the page the vote came from."""
    if identity is None:
        raise Unauthorized()
    ledger.cast_or_retract(
        identity,
        "comment",
        parse_int(comment_id, "Invalid comment_id"),
        parse_int(value, InvalidVoteValue.detail),
    )
    if return_to:
        return see_other(safe_return_path(return_to))
    return see_other(referer_path(referer))
