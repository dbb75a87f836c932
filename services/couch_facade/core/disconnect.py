"""
Caller disconnect handling.

An upstream call whose caller has gone away is cancelled instead of being
left to complete unobserved.
"""

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import Request

from .exceptions import ClientDisconnectedError

logger = logging.getLogger("facade.disconnect")

T = TypeVar("T")


async def wait_for_disconnect(request: Request) -> None:
    """
    Return once the ASGI server reports http.disconnect.

    Only valid after the request body has been consumed (or when there is none).
    """
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


async def run_until_disconnect(request: Request, call: Awaitable[T]) -> T:
    """
    Await `call`, cancelling it if the caller disconnects first.

    Raises:
        ClientDisconnectedError: the caller disconnected before `call` finished
    """
    upstream = asyncio.ensure_future(call)
    watcher = asyncio.ensure_future(wait_for_disconnect(request))
    try:
        await asyncio.wait({upstream, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        # Also reached when the handler task itself is cancelled.
        if not upstream.done():
            upstream.cancel()
        watcher.cancel()

    if upstream.done() and not upstream.cancelled():
        return upstream.result()

    logger.info(
        "Caller disconnected, upstream call cancelled",
        extra={"path": request.url.path, "method": request.method},
    )
    raise ClientDisconnectedError(f"{request.method} {request.url.path}")
