# foodorder/core/errors.py
"""
Application error hierarchy and the FastAPI handlers that render it.

Services raise these instead of HTTPException so the same rules hold for
every route: each error becomes a JSON body of the shape

    {"success": false, "message": "<human readable reason>"}

with the status code carried by the error class. Raw exception text from
the database or libraries is logged, never returned to the client.
"""

import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to a structured JSON response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Bad input shape or value (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    """Bad credentials, or a missing / expired / invalid token (401)."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized access"


class ForbiddenError(AppError):
    """Authenticated but not allowed to do this (403)."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(AppError):
    """Referenced entity does not exist (404)."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StoreError(AppError):
    """A read or write against the database failed (500)."""

    default_message = "Database operation failed"


class AggregationError(StoreError):
    """One of the dashboard aggregate queries failed (500)."""

    default_message = "Failed to fetch stats"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(
            f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
        )
    return _error_response(exc.status_code, exc.message)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Convert FastAPI's 422 payload errors into our 400 envelope.

    Only the first error is reported, e.g. "body.email: Field required".
    """
    errors = exc.errors()
    if not errors:
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request")

    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        f"{location}: {message}" if location else message,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


@contextmanager
def store_errors(
    message: str,
    error_cls: type[StoreError] = StoreError,
    also: tuple[type[Exception], ...] = (),
):
    """
    Re-raise SQLAlchemy failures inside the block as `error_cls(message)`.
    Exception types in `also` are translated the same way.

    The original database error is logged with its traceback; the client
    only ever sees `message`.

        with store_errors("Error deleting user"):
            repo.delete(session, user)
    """
    try:
        yield
    except (SQLAlchemyError, *also):
        logger.exception(message)
        raise error_cls(message)
