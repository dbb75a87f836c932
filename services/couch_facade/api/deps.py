"""
Dependency Injection for the facade API.

Manage request handler dependencies using FastAPI Depends.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header, Query, Request

from ..client import CouchDbClient
from ..core.exceptions import (
    InvalidContentLengthError,
    LengthRequiredError,
    MissingRevisionError,
)

logger = logging.getLogger("facade.deps")


# ==========================================
# 1. Service Accessors
# ==========================================


def get_couchdb_client(request: Request) -> CouchDbClient:
    return request.app.state.couchdb_client


# Service Dependency Type Aliases
CouchDbClientDep = Annotated[CouchDbClient, Depends(get_couchdb_client)]


# ==========================================
# 2. Request Preconditions
# ==========================================


async def require_revision(rev: Optional[str] = Query(None)) -> str:
    """
    Require the revision token on attachment writes.

    Raises:
        MissingRevisionError: `rev` is absent or empty
    """
    if not rev:
        logger.warning("Attachment write rejected: missing rev")
        raise MissingRevisionError()
    return rev


async def optional_revision(rev: Optional[str] = Query(None)) -> Optional[str]:
    return rev or None


async def require_content_length(
    content_length: Optional[str] = Header(None),
) -> int:
    """
    Require a declared body length for streamed uploads.

    Raises:
        LengthRequiredError: no Content-Length header
        InvalidContentLengthError: header is not a non-negative integer
    """
    if content_length is None:
        logger.warning("Attachment write rejected: missing Content-Length")
        raise LengthRequiredError()
    try:
        length = int(content_length)
    except ValueError:
        raise InvalidContentLengthError(content_length) from None
    if length < 0:
        raise InvalidContentLengthError(content_length)
    return length


# Precondition Dependency Type Aliases
RequiredRevisionDep = Annotated[str, Depends(require_revision)]
OptionalRevisionDep = Annotated[Optional[str], Depends(optional_revision)]
ContentLengthDep = Annotated[int, Depends(require_content_length)]
