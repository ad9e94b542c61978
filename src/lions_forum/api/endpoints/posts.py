"""Post and comment endpoints: create, view and delete."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Form
from fastapi.responses import RedirectResponse

from lions_forum.api.dependencies import ContentServiceDep, ForumReaderDep, IdentityDep
from lions_forum.api.responses import RowId, login_redirect, parse_int, see_other
from lions_forum.schemas.pages import CreatePostPage, PostPage

router = APIRouter(tags=["posts"])

FormField = Annotated[str, Form()]


@router.get("/createpost", response_model=CreatePostPage)
def create_post_form(
    identity: IdentityDep,
    reader: ForumReaderDep,
) -> CreatePostPage | RedirectResponse:
    if identity is None:
        return login_redirect()
    return CreatePostPage(
        logged_in=True,
        username=identity.username,
        categories=reader.list_categories(),
    )


@router.post("/createpost", response_model=None)
def create_post(
    identity: IdentityDep,
    content_service: ContentServiceDep,
    title: FormField = "",
    content: FormField = "",
    category_id: FormField = "",
    image: FormField = "",
) -> RedirectResponse:
    """Create a post and open it.

    ``image`` is an already-stored image reference; uploads are handled
    elsewhere.
    """
    if identity is None:
        return login_redirect()
    post = content_service.create_post(
        identity,
        category_id=parse_int(category_id, "Unknown category"),
        title=title,
        content=content,
        image_ref=image.strip() or None,
    )
    return see_other(f"/post/{post.id}")


@router.get("/post/{post_id}", response_model=PostPage)
def show_post(post_id: RowId, identity: IdentityDep, reader: ForumReaderDep) -> PostPage:
    return reader.post(identity, post_id)


@router.post("/post/{post_id}", response_model=None)
def add_comment(
    post_id: RowId,
    identity: IdentityDep,
    content_service: ContentServiceDep,
    comment: FormField = "",
) -> RedirectResponse:
    """Comment on a post; blank comments are ignored."""
    if identity is None:
        return login_redirect()
    content_service.create_comment(identity, post_id, comment)
    return see_other(f"/post/{post_id}")


@router.post("/deletepost", response_model=None)
def delete_post(
    identity: IdentityDep,
    content_service: ContentServiceDep,
    post_id: FormField = "",
) -> RedirectResponse:
    if identity is None:
        return login_redirect()
    content_service.delete_post(identity, parse_int(post_id, "Invalid post ID"))
    return see_other("/")


@router.post("/deletecomment", response_model=None)
def delete_comment(
    identity: IdentityDep,
    content_service: ContentServiceDep,
    comment_id: FormField = "",
) -> RedirectResponse:
    if identity is None:
        return login_redirect()
    content_service.delete_comment(identity, parse_int(comment_id, "Invalid comment ID"))
    return see_other("/")
