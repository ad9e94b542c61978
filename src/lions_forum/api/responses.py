"""Cookie and redirect helpers shared by the endpoint modules."""

from __future__ import annotations

from typing import Annotated
from urllib.parse import urlsplit

from fastapi import Path, status
from fastapi.responses import RedirectResponse

from lions_forum.core.errors import ValidationError
from lions_forum.core.settings import settings
from lions_forum.schemas.identity import IssuedSession

LOGIN_PATH = "/login"

# Ids are ``Integer`` columns, signed 32-bit on PostgreSQL.
MIN_ROW_ID = -(2**31)
MAX_ROW_ID = 2**31 - 1

# Path parameter for a row id; out-of-range values fail request validation (400).
RowId = Annotated[int, Path(ge=MIN_ROW_ID, le=MAX_ROW_ID)]


def see_other(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)


def login_redirect() -> RedirectResponse:
    """Where anonymous callers of create/delete endpoints are sent."""
    return see_other(LOGIN_PATH)


def set_session_cookie(response: RedirectResponse, issued: IssuedSession) -> None:
    # Expires together with the stored session row.
    response.set_cookie(
        key=settings.session_cookie_name,
        value=issued.token,
        expires=issued.expires_at,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: RedirectResponse) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def safe_return_path(candidate: str | None, default: str = "/") -> str:
    """Return ``candidate`` if it is a site-relative path, else ``default``."""
    if not candidate:
        return default
    parts = urlsplit(candidate)
    if parts.scheme or parts.netloc:
        return default
    if not parts.path.startswith("/") or parts.path.startswith("//") or "\\" in candidate:
        return default
    return candidate


def referer_path(referer: str | None, default: str = "/") -> str:
    """Reduce a ``Referer`` URL to its path and query.

    Browsers send absolute URLs; only the local part is used so the redirect
    stays on this site.
    """
    if not referer:
        return default
    parts = urlsplit(referer)
    path = f"{parts.path}?{parts.query}" if parts.query else parts.path
    return safe_return_path(path, default)


def parse_int(raw: str | None, detail: str) -> int:
    """Parse an integer form field, raising ``ValidationError(detail)`` if it is not one.

    Values outside the id column range are rejected the same way;
    any other range check belongs to the service that consumes the value.
    """
    try:
        value = int((raw or "").strip())
    except ValueError:
        raise ValidationError(detail) from None
    if not MIN_ROW_ID <= value <= MAX_ROW_ID:
        raise ValidationError(detail)
    return value
