"""Domain errors raised by the service layer.

Services never raise ``HTTPException``; the application installs handlers
that turn these into HTTP responses (see ``lions_forum.api.errors``).
"""

from __future__ import annotations


class ForumError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 400
    code = "forum_error"
    detail = "Request could not be completed"

    def __init__(self, detail: str | None = None, code: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        if code is not None:
            self.code = code
        super().__init__(self.detail)


class ValidationError(ForumError):
    status_code = 400
    code = "validation_error"
    detail = "Invalid input"


class InvalidVoteValue(ValidationError):
    code = "invalid_vote_value"
    detail = "Invalid like value"


class Conflict(ForumError):
    """Signup collided with an existing username or email.

    Does not say which field collided.
    """

    status_code = 400
    code = "conflict"
    detail = "Email or username already in use"


class Unauthorized(ForumError):
    status_code = 401
    code = "unauthorized"
    detail = "You must be logged in to do that"


class InvalidCredentials(ForumError):
    """Unknown email or wrong password; the two are never distinguished."""

    status_code = 200
    code = "invalid_credentials"
    detail = "Invalid credentials"


class ForbiddenOrNotFound(ForumError):
    """The target row does not exist or is not owned by the caller.

    A conditional delete cannot tell these apart and the response must not
    either.
    """

    status_code = 403
    code = "forbidden"
    detail = "You are not allowed to modify this resource"


class NotFound(ForumError):
    status_code = 404
    code = "not_found"
    detail = "Resource not found"


class StorageError(ForumError):
    """Unexpected failure in the relational store."""

    status_code = 500
    code = "storage_error"
    detail = "Something went wrong. Please try again later."
