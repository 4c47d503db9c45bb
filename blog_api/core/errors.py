"""
Application exception hierarchy and their HTTP translations.

Services and routes raise these; ``register_exception_handlers`` maps them to
responses so route bodies never build error payloads by hand.
"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from blog_api.core.logging import get_logger

logger = get_logger(__name__)


class BlogAPIError(Exception):
    """Base error carrying an optional user-facing message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message


class ValidationError(BlogAPIError):
    """Required input is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(BlogAPIError):
    """No record matches the requested id.

    Raised without a message the response is a bare 404.
    """

    status_code = status.HTTP_404_NOT_FOUND


class CredentialError(BlogAPIError):
    """A password could not be hashed (empty or missing input)."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentialsError(BlogAPIError):
    """Login with an unknown email or a wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED


class StorageError(BlogAPIError):
    """The backing file is unreadable, malformed, or could not be written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AccessError(BlogAPIError):
    """The access gate rejected the request (401 or 403, no body)."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code


def _message_response(exc: BlogAPIError) -> Response:
    if exc.message is None:
        return Response(status_code=exc.status_code)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def blog_api_error_handler(request: Request, exc: BlogAPIError) -> Response:
    return _message_response(exc)


async def access_error_handler(request: Request, exc: AccessError) -> Response:
    return Response(status_code=exc.status_code)


async def storage_error_handler(request: Request, exc: StorageError) -> Response:
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": "Storage failure"},
    )


def request_validation_message(exc: RequestValidationError) -> str:
    """One-line description of the first problem in a rejected request."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if not field:
        return f"Invalid request body: {first.get('msg', 'unreadable')}"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Malformed or missing request bodies are client errors like any other 400."""
    message = request_validation_message(exc)
    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the translations above to an application."""
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AccessError, access_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, storage_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(BlogAPIError, blog_api_error_handler)  # type: ignore[arg-type]
