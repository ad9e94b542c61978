"""Vote ledger: one signed vote per (voter, target)."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lions_forum.core.errors import InvalidVoteValue, NotFound, Unauthorized, ValidationError
from lions_forum.db.session import storage_guard
from lions_forum.repositories.vote_repo import VoteKind, VoteRepository
from lions_forum.schemas.identity import Identity

RETRACT = 0
VOTE_VALUES = frozenset({-1, RETRACT, 1})
VOTE_KINDS: tuple[VoteKind, ...] = ("post", "comment")


class VoteLedger:
    """Cast, change, retract and count votes on posts and comments."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self._repos = {kind: VoteRepository(session, kind) for kind in VOTE_KINDS}

    def _repo(self, kind: str) -> VoteRepository:
        try:
            return self._repos[kind]  # type: ignore[index]
        except KeyError:
            raise ValidationError(f"Unknown vote target: {kind}") from None

    def cast_or_retract(
        self,
        identity: Identity | None,
        kind: VoteKind,
        target_id: int,
        value: int,
    ) -> int:
        """Apply a vote request.

        Args:
            identity: The caller; voting requires one.
            kind: ``"post"`` or ``"comment"``.
            target_id: Id of the post or comment.
            value: 1 (like), -1 (dislike) or 0 (retract).

        Returns:
            The caller's vote on the target after the request.

        Raises:
            Unauthorized: If there is no caller.
            InvalidVoteValue: If ``value`` is not -1, 0 or 1. Checked before
                storage is touched.
            NotFound: If casting on a target that does not exist.
            StorageError: If the database fails.
        """
        if identity is None:
            raise Unauthorized("You must be logged in to like/dislike")
        if isinstance(value, bool) or value not in VOTE_VALUES:
            raise InvalidVoteValue()
        repo = self._repo(kind)

        with storage_guard(self.session, f"recording a {kind} vote"):
            if value == RETRACT:
                repo.remove(target_id, identity.user_id)
                self.session.commit()
                return RETRACT
            try:
                repo.upsert(target_id, identity.user_id, value)
                self.session.commit()
            except IntegrityError as err:
                # The foreign key rejected a target id that does not exist.
                self.session.rollback()
                raise NotFound(f"{kind.capitalize()} not found") from err
        return value

    def like_count(self, kind: VoteKind, target_id: int) -> int:
        """Number of +1 votes; this is what the likes badge shows."""
        with storage_guard(self.session, "counting likes"):
            return self._repo(kind).count(target_id, 1)

    def dislike_count(self, kind: VoteKind, target_id: int) -> int:
        with storage_guard(self.session, "counting dislikes"):
            return self._repo(kind).count(target_id, -1)

    def engagement_count(self, kind: VoteKind, target_id: int) -> int:
        """All vote rows on a target regardless of sign."""
        with storage_guard(self.session, "counting votes"):
            return self._repo(kind).count(target_id)

    def viewer_value(self, kind: VoteKind, target_id: int, user_id: int | None) -> int:
        """The given user's vote on a target: 1, -1 or 0."""
        if user_id is None:
            return RETRACT
        with storage_guard(self.session, "reading a vote"):
            return self._repo(kind).value_for(target_id, user_id)
