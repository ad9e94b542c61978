"""Exception handlers that render errors as a uniform JSON body."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lions_forum.core.errors import ForumError

logger = logging.getLogger(__name__)


def _error_response(
    *,
    status_code: int,
    detail: str,
    code: str,
    request: Request,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "code": code,
            "path": request.url.path,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )


async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    return _error_response(
        status_code=exc.status_code,
        detail=exc.detail,
        code=exc.code,
        request=request,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(
        status_code=exc.status_code,
        detail=detail,
        code="http_error",
        request=request,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    # Path parameters such as /post/abc land here; treat them as bad input.
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Invalid request",
        code="validation_error",
        request=request,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Something went wrong. Please try again later.",
        code="internal_server_error",
        request=request,
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ForumError, forum_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
