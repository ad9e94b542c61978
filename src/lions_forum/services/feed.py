"""Read-side views: home feed, single post, category, profile and search."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

from sqlalchemy.orm import Session

from lions_forum.core.errors import NotFound
from lions_forum.core.settings import settings
from lions_forum.db.session import storage_guard
from lions_forum.repositories.category_repo import CategoryRepository
from lions_forum.repositories.comment_repo import CommentRepository
from lions_forum.repositories.post_repo import PostRepository
from lions_forum.repositories.user_repo import UserRepository
from lions_forum.schemas.identity import Identity
from lions_forum.schemas.pages import (
    CategoryPage,
    HomePage,
    PostPage,
    ProfilePage,
    SearchResults,
)
from lions_forum.schemas.post import CategoryResponse


@dataclass(frozen=True)
class SearchRedirect:
    """A search that resolved to a single page instead of a result list."""

    location: str


def _viewer(identity: Identity | None) -> dict[str, object]:
    if identity is None:
        return {"logged_in": False, "username": None}
    return {"logged_in": True, "username": identity.username}


class ForumReader:
    """Assemble the forum's read-only views for a (possibly anonymous) viewer."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.comments = CommentRepository(session)
        self.categories = CategoryRepository(session)
        self.users = UserRepository(session)

    def list_categories(self) -> list[CategoryResponse]:
        with storage_guard(self.session, "listing categories"):
            return [CategoryResponse.model_validate(c) for c in self.categories.list_all()]

    def home(self, identity: Identity | None) -> HomePage:
        viewer_id = identity.user_id if identity else None
        categories = self.list_categories()
        with storage_guard(self.session, "loading the home feed"):
            posts = self.posts.list_recent(settings.feed_limit, viewer_id)
            popular = self.posts.list_popular(settings.popular_limit, viewer_id)
        return HomePage(
            **_viewer(identity),
            posts=posts,
            categories=categories,
            popular_posts=popular,
        )

    def post(self, identity: Identity | None, post_id: int) -> PostPage:
        """Raises NotFound if the post does not exist."""
        viewer_id = identity.user_id if identity else None
        categories = self.list_categories()
        with storage_guard(self.session, "loading a post"):
            summary = self.posts.summary(post_id, viewer_id)
            if summary is None:
                raise NotFound("Post not found")
            comments = self.comments.list_for_post(post_id, viewer_id)
        return PostPage(
            **_viewer(identity),
            post=summary,
            comments=comments,
            categories=categories,
            current_user_id=viewer_id,
        )

    def category(self, identity: Identity | None, category_id: int) -> CategoryPage:
        viewer_id = identity.user_id if identity else None
        categories = self.list_categories()
        with storage_guard(self.session, "loading a category"):
            category = self.categories.get_by_id(category_id)
            if category is None:
                raise NotFound("Category not found")
            posts = self.posts.list_by_category(category_id, settings.category_limit, viewer_id)
        return CategoryPage(
            **_viewer(identity),
            category=CategoryResponse.model_validate(category),
            posts=posts,
            categories=categories,
        )

    def profile(self, identity: Identity | None, username: str) -> ProfilePage:
        """A user's own posts and the posts they liked."""
        viewer_id = identity.user_id if identity else None
        categories = self.list_categories()
        with storage_guard(self.session, "loading a profile"):
            user = self.users.get_by_username(username)
            if user is None:
                raise NotFound("User not found")
            posts = self.posts.list_by_author(user.id, viewer_id)
            liked = self.posts.list_liked_by(user.id, viewer_id)
        return ProfilePage(
            **_viewer(identity),
            profile_username=user.username,
            posts=posts,
            liked_posts=liked,
            categories=categories,
        )

    def search(self, identity: Identity | None, query: str) -> SearchResults | SearchRedirect:
        """Resolve a search box query.

        An exact category name or username wins over title search; a title
        search with exactly one hit jumps straight to that post.
        """
        query = query.strip()
        if not query:
            return SearchRedirect("/")

        viewer_id = identity.user_id if identity else None
        with storage_guard(self.session, "searching"):
            category = self.categories.find_by_name(query)
            if category is not None:
                return SearchRedirect(f"/category/{category.id}")
            username = self.users.find_username(query)
            if username is not None:
                return SearchRedirect(f"/u/{quote(username)}")
            results = self.posts.search_titles(query, settings.search_limit, viewer_id)

        if len(results) == 1:
            return SearchRedirect(f"/post/{results[0].id}")
        return SearchResults(
            **_viewer(identity),
            query=query,
            not_found=not results,
            results=results,
            categories=self.list_categories(),
        )
