"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import Select, delete, func, select
from sqlalchemy.orm import Session

from lions_forum.models.category import Category
from lions_forum.models.post import Comment, Post
from lions_forum.models.user import User
from lions_forum.models.vote import PostLike
from lions_forum.schemas.post import PostSummary

__all__ = ["PostRepository"]

# No user has id 0, so anonymous viewers never match a vote row.
ANONYMOUS_VIEWER_ID = 0


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, post_id: int) -> bool:
        return self.session.scalar(select(Post.id).where(Post.id == post_id)) is not None

    def create(
        self,
        *,
        owner_id: int,
        category_id: int,
        title: str,
        content: str,
        image: str | None = None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        post = Post(
            user_id=owner_id,
            category_id=category_id,
            title=title,
            content=content,
            image=image,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def delete_owned(self, post_id: int, owner_id: int) -> bool:
        """Delete the post only if ``owner_id`` authored it.

        Returns:
            True when exactly one row was removed. False covers both a missing
            post and a post owned by someone else.
        """
        result = self.session.execute(
            delete(Post).where(Post.id == post_id, Post.user_id == owner_id)
        )
        return result.rowcount == 1

    # -- read models -------------------------------------------------------

    def _summary_select(self, viewer_id: int | None) -> Select:
        viewer = viewer_id if viewer_id is not None else ANONYMOUS_VIEWER_ID
        likes = (
            select(func.count())
            .where(PostLike.post_id == Post.id, PostLike.value == 1)
            .correlate(Post)
            .scalar_subquery()
        )
        comments = (
            select(func.count())
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        viewer_value = (
            select(PostLike.value)
            .where(PostLike.post_id == Post.id, PostLike.user_id == viewer)
            .correlate(Post)
            .scalar_subquery()
        )
        return (
            select(
                Post.id,
                Post.user_id,
                Post.category_id,
                Post.title,
                Post.content,
                Post.image,
                Post.created_at,
                User.username.label("author"),
                Category.name.label("category"),
                likes.label("likes"),
                comments.label("comments"),
                func.coalesce(viewer_value, 0).label("viewer_value"),
            )
            .join(User, User.id == Post.user_id)
            .join(Category, Category.id == Post.category_id)
        )

    def _summaries(self, stmt: Select) -> list[PostSummary]:
        return [PostSummary.model_validate(dict(row._mapping)) for row in self.session.execute(stmt)]

    def summary(self, post_id: int, viewer_id: int | None = None) -> PostSummary | None:
        rows = self._summaries(self._summary_select(viewer_id).where(Post.id == post_id))
        return rows[0] if rows else None

    def list_recent(self, limit: int, viewer_id: int | None = None) -> list[PostSummary]:
        """Return the newest posts first."""
        stmt = (
            self._summary_select(viewer_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return self._summaries(stmt)

    def list_popular(self, limit: int, viewer_id: int | None = None) -> list[PostSummary]:
        """Return posts ordered by net vote score, then recency."""
        score = (
            select(func.coalesce(func.sum(PostLike.value), 0))
            .where(PostLike.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        stmt = (
            self._summary_select(viewer_id)
            .order_by(score.desc(), Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return self._summaries(stmt)

    def list_by_category(
        self, category_id: int, limit: int, viewer_id: int | None = None
    ) -> list[PostSummary]:
        stmt = (
            self._summary_select(viewer_id)
            .where(Post.category_id == category_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return self._summaries(stmt)

    def list_by_author(self, user_id: int, viewer_id: int | None = None) -> list[PostSummary]:
        stmt = (
            self._summary_select(viewer_id)
            .where(Post.user_id == user_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return self._summaries(stmt)

    def list_liked_by(self, user_id: int, viewer_id: int | None = None) -> list[PostSummary]:
        """Return posts that ``user_id`` voted +1 on."""
        liked = select(PostLike.post_id).where(PostLike.user_id == user_id, PostLike.value == 1)
        stmt = (
            self._summary_select(viewer_id)
            .where(Post.id.in_(liked))
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return self._summaries(stmt)

    def search_titles(self, term: str, limit: int, viewer_id: int | None = None) -> list[PostSummary]:
        """Case-insensitive substring search over post titles."""
        pattern = f"%{_escape_like(term)}%"
        stmt = (
            self._summary_select(viewer_id)
            .where(Post.title.ilike(pattern, escape="\\"))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return self._summaries(stmt)
