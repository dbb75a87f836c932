"""
Custom exception classes.

Represent errors raised by the facade itself, as opposed to errors relayed
from the upstream database.
"""

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

FACADE_ERROR_HEADER = "X-Facade-Error"


class FacadeError(Exception):
    """Base exception class for the facade."""

    pass


class UpstreamError(FacadeError):
    """Base class for transport-level failures talking to the upstream."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"{type(cause).__name__} while calling upstream /{path}: {cause}")


class UpstreamUnreachableError(UpstreamError):
    """Raised when the upstream cannot be reached or the connection breaks."""

    pass


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream does not answer within the configured timeout."""

    pass


class InvalidRequestError(FacadeError):
    """Raised when an inbound request is rejected before any upstream call."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingRevisionError(InvalidRequestError):
    """Raised when an attachment write carries no revision token."""

    def __init__(self):
        super().__init__("Missing required query parameter: rev")


class LengthRequiredError(InvalidRequestError):
    """Raised when a streamed body does not declare its length up front."""

    status_code = status.HTTP_411_LENGTH_REQUIRED

    def __init__(self):
        super().__init__("Content-Length header is required for attachment uploads")


class InvalidContentLengthError(InvalidRequestError):
    """Raised when Content-Length is not a non-negative integer."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid Content-Length header: {value!r}")


class InvalidPathSegmentError(InvalidRequestError):
    """Raised when a path parameter is empty."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Path parameter must not be empty: {name}")


class ClientDisconnectedError(FacadeError):
    """Raised when the caller goes away while the upstream call is in flight."""

    pass


# ===========================================
# Exception Handlers
# ===========================================


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    """
    error_detail = str(exc)
    logger.error(
        f"Global exception handler caught: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "detail": error_detail},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler for HTTPException.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for validation errors.
    """
    return JSONResponse(
        status_code=422,
        content={"message": "Validation Error", "detail": str(exc.errors())},
    )
