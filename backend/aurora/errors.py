"""
Typed errors and their FastAPI exception handlers.

Every anticipated failure mode has its own exception class. Handlers turn
them into problem-details responses:

    {
        "title": "Category not found",
        "detail": "No category exists with id ...",
        "status": 404,
        ...extensions
    }

DownstreamFailure has no handler. Callers recover from it locally and it
never reaches the client.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AuroraError(Exception):
    """Base class for all Aurora errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    title: str = "Internal error"

    def __init__(
        self,
        detail: str,
        title: Optional[str] = None,
        extensions: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(detail)
        self.detail = detail
        if title is not None:
            self.title = title
        self.extensions = extensions or {}


class ValidationError(AuroraError):
    """Bad input shape or a request the current state cannot satisfy."""

    status_code = status.HTTP_400_BAD_REQUEST
    title = "Invalid request"


class AuthorizationError(AuroraError):
    """Caller does not own the resource, or the resource is system-protected."""

    status_code = status.HTTP_403_FORBIDDEN
    title = "Forbidden"


class NotFoundError(AuroraError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Not found"


class AuthenticationError(AuroraError):
    status_code = status.HTTP_401_UNAUTHORIZED
    title = "Not authenticated"


class DownstreamFailure(AuroraError):
    """The AI adapter timed out, raised, or returned something unusable."""

    status_code = status.HTTP_502_BAD_GATEWAY
    title = "AI service unavailable"


def problem_details(
    status_code: int,
    title: str,
    detail: str,
    extensions: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a problem-details body."""
    body: Dict[str, Any] = {
        "title": title,
        "detail": detail,
        "status": status_code,
    }
    if extensions:
        body.update(extensions)
    return body


async def aurora_error_handler(request: Request, exc: AuroraError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    else:
        logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=problem_details(exc.status_code, exc.title, exc.detail, exc.extensions),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem_details(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal error",
            "An error occurred while processing the request",
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the Aurora error handlers to an application."""
    app.add_exception_handler(AuroraError, aurora_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
