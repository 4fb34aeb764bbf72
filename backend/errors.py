"""API exceptions and the handlers that turn them into JSON responses.

Every error body has the shape ``{"error": "<message>"}``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .logging_config import get_logger

logger = get_logger(__name__)


class LibraryApiError(Exception):
    """Base error carrying the HTTP status and the client-facing message."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class DatabaseOperationError(LibraryApiError):
    """A database call failed; message is the route's fixed error string."""

    status_code = 500


class InvalidParameterError(LibraryApiError):
    status_code = 400


def register_error_handlers(app: FastAPI) -> None:
    """Register LibraryApiError and request-parsing failures as JSON errors."""

    @app.exception_handler(LibraryApiError)
    async def library_api_error_handler(request: Request, exc: LibraryApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        # Only malformed JSON or a non-object body gets here; fields themselves are never checked
        logger.debug(f"{request.method} {request.url.path} -> 400: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})
