"""Ownership-guarded creation and deletion of posts and comments."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from lions_forum.core.errors import ForbiddenOrNotFound, NotFound, Unauthorized, ValidationError
from lions_forum.db.session import storage_guard
from lions_forum.models.post import Comment, Post
from lions_forum.repositories.category_repo import CategoryRepository
from lions_forum.repositories.comment_repo import CommentRepository
from lions_forum.repositories.post_repo import PostRepository
from lions_forum.schemas.identity import Identity

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200


def _require(identity: Identity | None) -> Identity:
    if identity is None:
        raise Unauthorized()
    return identity


class ContentService:
    """Create and delete forum content on behalf of an authenticated caller.

    Deletes are a single conditional statement matching both the row id and
    the caller as owner. A miss is reported as :class:`ForbiddenOrNotFound`
    whether the row is absent or belongs to somebody else.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.comments = CommentRepository(session)
        self.categories = CategoryRepository(session)

    def create_post(
        self,
        identity: Identity | None,
        category_id: int,
        title: str,
        content: str,
        image_ref: str | None = None,
    ) -> Post:
        """Insert a post owned by the caller.

        Raises:
            Unauthorized: If there is no caller.
            ValidationError: If title/content are blank or the category is unknown.
            StorageError: If the database fails.
        """
        caller = _require(identity)
        title = title.strip()
        content = content.strip()
        if not title or not content:
            raise ValidationError("Title and content are required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")

        with storage_guard(self.session, "creating a post"):
            if self.categories.get_by_id(category_id) is None:
                raise ValidationError("Unknown category")
            post = self.posts.create(
                owner_id=caller.user_id,
                category_id=category_id,
                title=title,
                content=content,
                image=image_ref or None,
            )
            self.session.commit()

        logger.info("User id=%d created post %d", caller.user_id, post.id)
        return post

    def create_comment(self, identity: Identity | None, post_id: int, text: str) -> Comment | None:
        """Add a comment to a post.

        Blank or whitespace-only text is dropped silently and ``None`` is
        returned; no row is written.

        Raises:
            Unauthorized: If there is no caller.
            NotFound: If the post does not exist.
            StorageError: If the database fails.
        """
        caller = _require(identity)
        text = text.strip()
        if not text:
            return None

        with storage_guard(self.session, "creating a comment"):
            if not self.posts.exists(post_id):
                raise NotFound("Post not found")
            comment = self.comments.create(post_id=post_id, owner_id=caller.user_id, content=text)
            self.session.commit()
        return comment

    def delete_post(self, identity: Identity | None, post_id: int) -> None:
        """Delete a post the caller owns; its comments and votes go with it."""
        caller = _require(identity)
        with storage_guard(self.session, "deleting a post"):
            deleted = self.posts.delete_owned(post_id, caller.user_id)
            self.session.commit()
        if not deleted:
            logger.info("User id=%d denied deleting post %d", caller.user_id, post_id)
            raise ForbiddenOrNotFound("You are not allowed to delete this post.")
        logger.info("User id=%d deleted post %d", caller.user_id, post_id)

    def delete_comment(self, identity: Identity | None, comment_id: int) -> None:
        """Delete a comment the caller owns."""
        caller = _require(identity)
        with storage_guard(self.session, "deleting a comment"):
            deleted = self.comments.delete_owned(comment_id, caller.user_id)
            self.session.commit()
        if not deleted:
            logger.info("User id=%d denied deleting comment %d", caller.user_id, comment_id)
            raise ForbiddenOrNotFound("You are not allowed to delete this comment.")
