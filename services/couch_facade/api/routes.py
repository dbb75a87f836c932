"""
Facade router.

Each inbound operation is translated into exactly one upstream call and the
upstream response is relayed back unchanged. Endpoints are registered from
the ROUTES table.
"""

import logging
from typing import Callable, Dict

from fastapi import APIRouter, Request
from fastapi.responses import Response, StreamingResponse
from starlette.requests import ClientDisconnect

from ..core.disconnect import run_until_disconnect
from ..core.exceptions import ClientDisconnectedError
from ..core.relay import relay_response, relay_stream
from ..models.route import ROUTES
from .deps import ContentLengthDep, CouchDbClientDep, OptionalRevisionDep, RequiredRevisionDep

logger = logging.getLogger("facade.routes")


# ===========================================
# Databases
# ===========================================


async def create_database(dbname: str, request: Request, couch: CouchDbClientDep) -> Response:
    """Create the named database (upstream decides created vs. already exists)."""
    upstream = await run_until_disconnect(request, couch.create_database(dbname))
    return relay_response(upstream)


async def get_database(dbname: str, request: Request, couch: CouchDbClientDep) -> Response:
    """Return the upstream's database info object."""
    upstream = await run_until_disconnect(request, couch.get_database(dbname))
    return relay_response(upstream)


async def delete_database(dbname: str, request: Request, couch: CouchDbClientDep) -> Response:
    upstream = await run_until_disconnect(request, couch.delete_database(dbname))
    return relay_response(upstream)


# ===========================================
# Documents
# ===========================================


async def put_document(
    dbname: str,
    docid: str,
    request: Request,
    couch: CouchDbClientDep,
    rev: OptionalRevisionDep,
) -> Response:
    """
    Create or update a document.

    The body is read fully and forwarded byte-for-byte; conflicting
    revisions are detected by the upstream.
    """
    body = await request.body()
    upstream = await run_until_disconnect(
        request, couch.put_document(dbname, docid, body, rev=rev)
    )
    return relay_response(upstream)


async def get_document(
    dbname: str,
    docid: str,
    request: Request,
    couch: CouchDbClientDep,
    rev: OptionalRevisionDep,
) -> Response:
    upstream = await run_until_disconnect(request, couch.get_document(dbname, docid, rev=rev))
    return relay_response(upstream)


# ===========================================
# Attachments
# ===========================================


async def put_attachment(
    dbname: str,
    docid: str,
    attname: str,
    request: Request,
    couch: CouchDbClientDep,
    rev: RequiredRevisionDep,
    content_length: ContentLengthDep,
) -> Response:
    """
    Add an attachment to a document.

    Requires the document's current revision as `rev`. The body is streamed
    to the upstream with the declared Content-Length.
    """
    try:
        upstream = await couch.put_attachment(
            dbname, docid, attname, rev, request.stream(), content_length
        )
    except ClientDisconnect as e:
        logger.info(
            "Caller disconnected during attachment upload",
            extra={"path": request.url.path, "content_length": content_length},
        )
        raise ClientDisconnectedError(f"{request.method} {request.url.path}") from e
    return relay_response(upstream)


async def get_attachment(
    dbname: str,
    docid: str,
    attname: str,
    request: Request,
    couch: CouchDbClientDep,
) -> StreamingResponse:
    """Stream an attachment back to the caller. No revision is required."""
    upstream = await run_until_disconnect(request, couch.open_attachment(dbname, docid, attname))
    return relay_stream(upstream)


HANDLERS: Dict[str, Callable] = {
    "create_database": create_database,
    "get_database": get_database,
    "delete_database": delete_database,
    "put_document": put_document,
    "get_document": get_document,
    "put_attachment": put_attachment,
    "get_attachment": get_attachment,
}


def build_router() -> APIRouter:
    """Register one endpoint per route descriptor."""
    router = APIRouter()
    for route in ROUTES:
        router.add_api_route(
            route.path,
            HANDLERS[route.name],
            methods=[route.method],
            name=route.name,
        )
    return router
