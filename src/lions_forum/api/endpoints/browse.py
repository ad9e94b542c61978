"""Read-only views: home feed, categories, profiles and search."""

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from lions_forum.api.dependencies import ForumReaderDep, IdentityDep
from lions_forum.api.responses import RowId, login_redirect, see_other
from lions_forum.schemas.pages import CategoryPage, HomePage, ProfilePage, SearchResults
from lions_forum.schemas.post import CategoryResponse
from lions_forum.services.feed import SearchRedirect

router = APIRouter(tags=["browse"])


@router.get("/", response_model=HomePage)
def home(identity: IdentityDep, reader: ForumReaderDep) -> HomePage:
    """Latest posts, popular posts and the category list."""
    return reader.home(identity)


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(reader: ForumReaderDep) -> list[CategoryResponse]:
    return reader.list_categories()


@router.get("/category/{category_id}", response_model=CategoryPage)
def show_category(category_id: RowId, identity: IdentityDep, reader: ForumReaderDep) -> CategoryPage:
    return reader.category(identity, category_id)


@router.get("/u/{username}", response_model=ProfilePage)
def show_profile(username: str, identity: IdentityDep, reader: ForumReaderDep) -> ProfilePage:
    return reader.profile(identity, username)


@router.get("/profile", response_model=None)
def my_profile(identity: IdentityDep) -> RedirectResponse:
    if identity is None:
        return login_redirect()
    return see_other(f"/u/{quote(identity.username)}")


@router.get("/search", response_model=SearchResults)
def search(
    identity: IdentityDep,
    reader: ForumReaderDep,
    q: str = "",
) -> SearchResults | RedirectResponse:
    """Search by category name, username or post title.

    Exact category and username matches redirect, as does a title search
    with a single hit.
    """
    outcome = reader.search(identity, q)
    if isinstance(outcome, SearchRedirect):
        return see_other(outcome.location)
    return outcome
