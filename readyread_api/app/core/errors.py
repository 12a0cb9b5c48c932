"""
Application errors and the JSON error envelope.

Every error a client can observe derives from ``AppError``.  Each
subclass knows its HTTP status and carries two messages: ``message``
is meant for people using the API, while ``developer_message`` may
carry technical detail.  Both end up in the envelope::

    {"message": "...", "developerMessage": "...", "code": 404}

Empty message fields are left out of the envelope.

The storage layer raises ``NoRowsError`` and ``StorageError``; the
services add ``EmailTakenError`` and ``WrongPasswordError``; exception
handlers installed by ``install_exception_handlers`` turn all of them
into responses.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class AppError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "something went wrong on the server side"
    default_developer_message: str = ""

    def __init__(self, message: Optional[str] = None, developer_message: Optional[str] = None) -> None:
        self.message = message if message is not None else self.default_message
        self.developer_message = (
            developer_message if developer_message is not None else self.default_developer_message
        )
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return error_envelope(self.status_code, self.message, self.developer_message)


class NoRowsError(AppError):
    """A lookup matched nothing, or a write affected zero rows."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "requested resource is not found"
    default_developer_message = "maybe you have an error in your request or requested resource not found"


class ValidationFailedError(AppError):
    """Input did not pass validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "input validation failed. please, provide valid values"


class EmailTakenError(AppError):
    """A user with the given email already exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "email already taken"


class WrongPasswordError(AppError):
    """Email/password pair or old password did not match."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "wrong email or password"


class StorageError(AppError):
    """The database driver failed or timed out."""


class PasswordHashError(AppError):
    """The password could not be hashed."""


def error_envelope(code: int, message: str = "", developer_message: str = "") -> Dict[str, Any]:
    """Build the error body; empty messages are omitted."""
    body: Dict[str, Any] = {}
    if message:
        body["message"] = message
    if developer_message:
        body["developerMessage"] = developer_message
    body["code"] = code
    return body


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Join pydantic error entries into ``field: reason; field: reason``.

    The leading location part (``body``, ``path``, ``query``) is
    dropped so that ``("body", "username")`` reads as ``username``.
    Messages raised from our own predicates lose pydantic's
    ``"Value error, "`` prefix.
    """
    parts = []
    for err in errors:
        loc = [str(item) for item in err.get("loc", ())]
        if loc and loc[0] in {"body", "path", "query", "header", "cookie"}:
            loc = loc[1:]
        if err.get("type") == "value_error" and "error" in err.get("ctx", {}):
            reason = str(err["ctx"]["error"])
        else:
            reason = err.get("msg", "invalid value")
        if err.get("type") == "json_invalid":
            reason = "request body is not valid JSON"
            loc = []
        parts.append(f"{'.'.join(loc)}: {reason}" if loc else reason)
    return "; ".join(parts)


def install_exception_handlers(app: FastAPI) -> None:
    """Register handlers mapping errors onto the JSON envelope."""
    logger = logging.getLogger(__name__)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.developer_message or exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown routes, wrong methods and the read-timeout middleware.
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationFailedError(
            message=format_validation_errors(exc.errors()),
            developer_message=ValidationFailedError.default_message,
        )
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                AppError.default_message,
                str(exc),
            ),
        )
