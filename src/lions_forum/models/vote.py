# src/lions_forum/models/vote.py
"""Models capturing likes and dislikes on posts and comments."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from lions_forum.db.session import Base


class PostLike(Base):
    """Per-user vote on a post.

    The composite primary key is the conflict target of the vote upsert, so
    a user can hold at most one row per post. No row means no vote.
    """

    __tablename__ = "post_likes"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_post_likes_value"),
        Index("ix_post_likes_user_id", "user_id"),
    )

    target_key = "post_id"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # 1 = like, -1 = dislike.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)


class CommentLike(Base):
    """Per-user vote on a comment, independent of post votes."""

    __tablename__ = "comment_likes"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_comment_likes_value"),
        Index("ix_comment_likes_user_id", "user_id"),
    )

    target_key = "comment_id"

    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
