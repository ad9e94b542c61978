# src/lions_forum/schemas/post.py
"""Post, comment and category Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CategoryResponse(BaseModel):
    """Category as listed in navigation."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class PostSummary(BaseModel):
    """Post row enriched with author, category and vote aggregates."""

    id: int
    user_id: int
    category_id: int
    title: str
    content: str
    image: str | None = None
    created_at: datetime
    author: str
    category: str
    likes: int = Field(0, description="Number of +1 votes")
    comments: int = Field(0, description="Number of comments")
    viewer_value: int = Field(0, description="Caller's own vote: 1, -1 or 0")

    model_config = ConfigDict(from_attributes=True)


class CommentResponse(BaseModel):
    """Comment with its author and vote aggregates."""

    id: int
    post_id: int
    user_id: int
    author: str
    content: str
    created_at: datetime
    likes: int = 0
    viewer_value: int = 0

    model_config = ConfigDict(from_attributes=True)
