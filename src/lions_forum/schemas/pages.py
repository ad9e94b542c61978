"""Response bodies for the read-only forum views."""

from pydantic import BaseModel

from .post import CategoryResponse, CommentResponse, PostSummary


class PageBase(BaseModel):
    """Fields every view carries about the caller."""

    logged_in: bool = False
    username: str | None = None


class HomePage(PageBase):
    posts: list[PostSummary]
    categories: list[CategoryResponse]
    popular_posts: list[PostSummary]


class PostPage(PageBase):
    post: PostSummary
    comments: list[CommentResponse]
    categories: list[CategoryResponse]
    current_user_id: int | None = None


class CategoryPage(PageBase):
    category: CategoryResponse
    posts: list[PostSummary]
    categories: list[CategoryResponse]


class ProfilePage(PageBase):
    profile_username: str
    posts: list[PostSummary]
    liked_posts: list[PostSummary]
    categories: list[CategoryResponse]


class SearchResults(PageBase):
    query: str
    not_found: bool
    results: list[PostSummary]
    categories: list[CategoryResponse]


class CreatePostPage(PageBase):
    categories: list[CategoryResponse]
