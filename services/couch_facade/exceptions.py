"""
Where: services/couch_facade/exceptions.py
What: Facade exception handler registration and custom HTTP mappings.
Why: Keep error handling setup isolated from route and lifecycle concerns.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.exceptions import (
    FACADE_ERROR_HEADER,
    ClientDisconnectedError,
    InvalidRequestError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)

logger = logging.getLogger("facade.exceptions")

# nginx convention for "client closed request"; never reaches the caller.
CLIENT_CLOSED_REQUEST = 499


async def upstream_unreachable_handler(request: Request, exc: UpstreamUnreachableError):
    return JSONResponse(
        status_code=502,
        content={"message": "Bad Gateway", "detail": str(exc)},
        headers={FACADE_ERROR_HEADER: "upstream-unreachable"},
    )


async def upstream_timeout_handler(request: Request, exc: UpstreamTimeoutError):
    return JSONResponse(
        status_code=504,
        content={"message": "Gateway Timeout", "detail": str(exc)},
        headers={FACADE_ERROR_HEADER: "upstream-timeout"},
    )


async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    logger.warning(
        f"Rejected {request.method} {request.url.path}: {exc}",
        extra={"path": request.url.path, "method": request.method, "status": exc.status_code},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc)},
        headers={FACADE_ERROR_HEADER: "bad-request"},
    )


async def client_disconnected_handler(request: Request, exc: ClientDisconnectedError):
    return Response(status_code=CLIENT_CLOSED_REQUEST)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(UpstreamUnreachableError, upstream_unreachable_handler)
    app.add_exception_handler(UpstreamTimeoutError, upstream_timeout_handler)
    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.add_exception_handler(ClientDisconnectedError, client_disconnected_handler)
