"""
Response relay module.

Rebuilds upstream responses for the caller: identical status code, identical
body bytes, and the subset of headers the caller needs.
"""

from typing import AsyncIterator, Dict

import httpx
from fastapi.responses import Response, StreamingResponse
from starlette.background import BackgroundTask

# Headers copied from the upstream response (compared case-insensitively).
RELAYED_HEADERS = (
    "content-type",
    "etag",
    "location",
    "cache-control",
    "content-md5",
    "accept-ranges",
    "x-couch-request-id",
    "x-couch-update-newrev",
)


def relayed_headers(upstream: httpx.Response, include_length: bool = False) -> Dict[str, str]:
    """
    Select the headers to copy from an upstream response.

    Content-Length is only copied for streamed bodies; buffered relays
    recompute it from the identical body.
    """
    names = RELAYED_HEADERS + ("content-length",) if include_length else RELAYED_HEADERS
    return {name: upstream.headers[name] for name in names if name in upstream.headers}


def relay_response(upstream: httpx.Response) -> Response:
    """
    Rebuild a fully read upstream response.
    """
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=relayed_headers(upstream),
    )


async def _iter_upstream(upstream: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for chunk in upstream.aiter_raw():
            yield chunk
    finally:
        await upstream.aclose()


def relay_stream(upstream: httpx.Response) -> StreamingResponse:
    """
    Rebuild an unread upstream response as a stream.

    The upstream response is closed when the body has been copied, or when
    the relay is torn down early.
    """
    return StreamingResponse(
        _iter_upstream(upstream),
        status_code=upstream.status_code,
        headers=relayed_headers(upstream, include_length=True),
        background=BackgroundTask(upstream.aclose),
    )
