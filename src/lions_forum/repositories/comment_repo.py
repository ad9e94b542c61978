"""Data access helpers for comments."""
from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from lions_forum.models.post import Comment
from lions_forum.models.user import User
from lions_forum.models.vote import CommentLike
from lions_forum.repositories.post_repo import ANONYMOUS_VIEWER_ID
from lions_forum.schemas.post import CommentResponse

__all__ = ["CommentRepository"]


class CommentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, post_id: int, owner_id: int, content: str) -> Comment:
        comment = Comment(post_id=post_id, user_id=owner_id, content=content)
        self.session.add(comment)
        self.session.flush()
        return comment

    def delete_owned(self, comment_id: int, owner_id: int) -> bool:
        """Delete the comment only if ``owner_id`` wrote it; True on success."""
        result = self.session.execute(
            delete(Comment).where(Comment.id == comment_id, Comment.user_id == owner_id)
        )
        return result.rowcount == 1

    def list_for_post(self, post_id: int, viewer_id: int | None = None) -> list[CommentResponse]:
        """Return a post's comments newest first with like totals and the viewer's vote."""
        viewer = viewer_id if viewer_id is not None else ANONYMOUS_VIEWER_ID
        likes = (
            select(func.count())
            .where(CommentLike.comment_id == Comment.id, CommentLike.value == 1)
            .correlate(Comment)
            .scalar_subquery()
        )
        viewer_value = (
            select(CommentLike.value)
            .where(CommentLike.comment_id == Comment.id, CommentLike.user_id == viewer)
            .correlate(Comment)
            .scalar_subquery()
        )
        stmt = (
            select(
                Comment.id,
                Comment.post_id,
                Comment.user_id,
                User.username.label("author"),
                Comment.content,
                Comment.created_at,
                likes.label("likes"),
                func.coalesce(viewer_value, 0).label("viewer_value"),
            )
            .join(User, User.id == Comment.user_id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        return [CommentResponse.model_validate(dict(row._mapping)) for row in self.session.execute(stmt)]
