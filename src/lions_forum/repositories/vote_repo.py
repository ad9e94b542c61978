"""Vote storage for posts and comments.

Casting a vote is one atomic ``INSERT ... ON CONFLICT DO UPDATE`` keyed on
the (target, voter) primary key. There is no read-then-write
path: two concurrent submissions from the same user collapse onto one row.
"""
from __future__ import annotations

from typing import Any, Literal

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from lions_forum.models.vote import CommentLike, PostLike

__all__ = ["VoteKind", "VoteRepository"]

VoteKind = Literal["post", "comment"]

_MODELS: dict[str, type[PostLike] | type[CommentLike]] = {
    "post": PostLike,
    "comment": CommentLike,
}

_DIALECT_INSERTS: dict[str, Any] = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class VoteRepository:
    """Vote rows for one target kind (posts or comments)."""

    def __init__(self, session: Session, kind: VoteKind) -> None:
        if kind not in _MODELS:
            raise ValueError(f"Unknown vote target kind: {kind!r}")
        self.session = session
        self.kind = kind
        self.model = _MODELS[kind]
        self.target_column = getattr(self.model, self.model.target_key)

    def _insert(self) -> Any:
        dialect = self.session.get_bind().dialect.name
        try:
            return _DIALECT_INSERTS[dialect]
        except KeyError:
            raise NotImplementedError(f"No atomic upsert available for dialect {dialect!r}") from None

    def upsert(self, target_id: int, user_id: int, value: int) -> None:
        """Insert the vote or overwrite the existing value in one statement."""
        insert = self._insert()
        stmt = insert(self.model).values(
            {self.model.target_key: target_id, "user_id": user_id, "value": value}
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[self.model.target_key, "user_id"],
            set_={"value": stmt.excluded["value"]},
        )
        self.session.execute(stmt)

    def remove(self, target_id: int, user_id: int) -> int:
        """Delete the caller's vote; returns rows removed (0 when there was none)."""
        result = self.session.execute(
            delete(self.model).where(
                self.target_column == target_id,
                self.model.user_id == user_id,
            )
        )
        return result.rowcount or 0

    def value_for(self, target_id: int, user_id: int) -> int:
        """Return the user's vote on the target, 0 when absent."""
        value = self.session.scalar(
            select(self.model.value).where(
                self.target_column == target_id,
                self.model.user_id == user_id,
            )
        )
        return int(value) if value is not None else 0

    def count(self, target_id: int, value: int | None = None) -> int:
        """Count vote rows on a target, optionally only those with ``value``."""
        stmt = select(func.count()).select_from(self.model).where(self.target_column == target_id)
        if value is not None:
            stmt = stmt.where(self.model.value == value)
        return self.session.scalar(stmt) or 0
