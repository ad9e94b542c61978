"""Signup, login and logout endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from lions_forum.api.dependencies import AuthenticatorDep, IdentityDep
from lions_forum.api.responses import (
    LOGIN_PATH,
    clear_session_cookie,
    see_other,
    set_session_cookie,
)
from lions_forum.core.errors import Conflict, InvalidCredentials, StorageError, ValidationError
from lions_forum.core.settings import settings
from lions_forum.schemas.pages import PageBase

router = APIRouter(tags=["auth"])

FormField = Annotated[str, Form()]


@router.get("/signup", response_model=PageBase)
async def signup_form(identity: IdentityDep) -> PageBase | RedirectResponse:
    """Signup form state; signed-in callers are sent home."""
    if identity is not None:
        return see_other("/")
    return PageBase()


@router.post("/signup", response_model=None)
def signup(
    authenticator: AuthenticatorDep,
    username: FormField = "",
    email: FormField = "",
    password: FormField = "",
) -> RedirectResponse | JSONResponse:
    """Register an account and send the caller to the login form.

    Validation failures and conflicts echo the submitted email and username
    back so the form can be refilled; the password never is.
    """
    try:
        authenticator.signup(username=username, email=email, password=password)
    except (ValidationError, Conflict) as exc:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.detail,
                "email": email.strip(),
                "username": username.strip(),
            },
        )
    return see_other(LOGIN_PATH)


@router.get("/login", response_model=PageBase)
async def login_form(identity: IdentityDep) -> PageBase | RedirectResponse:
    """Login form state; signed-in callers are sent home."""
    if identity is not None:
        return see_other("/")
    return PageBase()


@router.post("/login", response_model=None)
def login(
    authenticator: AuthenticatorDep,
    email: FormField = "",
    password: FormField = "",
) -> RedirectResponse | JSONResponse:
    try:
        issued = authenticator.login(email=email, password=password)
    except InvalidCredentials as exc:
        # The form is re-rendered with an error, not treated as a failed request.
        return JSONResponse(status_code=status.HTTP_200_OK, content={"error": exc.detail})
    response = see_other("/")
    set_session_cookie(response, issued)
    return response


@router.api_route("/logout", methods=["GET", "POST"], response_model=None)
def logout(request: Request, authenticator: AuthenticatorDep) -> RedirectResponse:
    """Revoke the caller's session, if any, and clear the cookie."""
    token = request.cookies.get(settings.session_cookie_name)
    try:
        authenticator.logout(token)
    except StorageError:
        # Already logged by the storage guard; the cookie is cleared regardless.
        pass
    response = see_other("/")
    clear_session_cookie(response)
    return response
