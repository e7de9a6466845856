# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Error taxonomy and the exception handlers that render it.

Every response, success or failure, uses the envelope
``{"status": <http code>, "message": <text>, ...payload}``.  Handlers raise
one of the ``AppError`` subclasses below; the functions registered by
:func:`register_exception_handlers` turn them into that envelope.

Internal failures are redacted: the client only sees a generic message,
the underlying exception and traceback go to the server log.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from core.logger import logger

_INTERNAL_MESSAGE = "Internal Server Error"


class AppError(Exception):
    """Base class – carries the HTTP status used for the envelope."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    """Missing, malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppError):
    """Credential mismatch."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Duplicate unique key."""

    status_code = status.HTTP_409_CONFLICT


class InternalError(AppError):
    """Hashing, database or filesystem failure.  Chain the cause with ``from``."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def envelope(status_code: int, message: str, **payload) -> dict:
    """Build the response body shared by every route."""
    return {"status": status_code, "message": message, **payload}


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
        message = _INTERNAL_MESSAGE
    else:
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content=envelope(exc.status_code, message))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Report the first offending field only, e.g. "price: Input should be a valid number"
    errors = exc.errors()
    if errors:
        loc = ".".join(str(part) for part in errors[0]["loc"] if part not in ("body", "query", "path"))
        message = f"{loc}: {errors[0]['msg']}" if loc else errors[0]["msg"]
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=envelope(status.HTTP_400_BAD_REQUEST, message),
    )


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("%s %s database error", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, _INTERNAL_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)
