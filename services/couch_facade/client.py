"""
CouchDB upstream client.

Translates each facade operation into exactly one call on the shared
httpx.AsyncClient. Never retries; transport failures are mapped to
UpstreamError subclasses, upstream HTTP errors are returned untouched.
"""

import logging
from typing import AsyncIterable, Dict, Optional

import httpx

from services.common.core.request_context import get_request_id

from .core.exceptions import UpstreamTimeoutError, UpstreamUnreachableError
from .core.paths import compose_path
from .models.upstream import UpstreamRequest

logger = logging.getLogger("facade.client")

REQUEST_ID_HEADER = "X-Request-ID"
DOCUMENT_CONTENT_TYPE = "application/json"
# Attachments are always sent with this type, whatever the caller declared.
ATTACHMENT_CONTENT_TYPE = "application/octet"


class CouchDbClient:
    """
    Upstream calls for the seven facade operations.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        attachment_timeout: Optional[httpx.Timeout] = None,
    ):
        """
        Args:
            client: Shared httpx.AsyncClient with base_url set to the upstream
            attachment_timeout: Timeout for attachment transfers (client default if None)
        """
        self.client = client
        self.attachment_timeout = attachment_timeout

    async def aclose(self) -> None:
        await self.client.aclose()

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    async def create_database(self, dbname: str) -> httpx.Response:
        return await self.send(
            UpstreamRequest(method="PUT", path=compose_path(dbname=dbname), content=b"")
        )

    async def get_database(self, dbname: str) -> httpx.Response:
        return await self.send(UpstreamRequest(method="GET", path=compose_path(dbname=dbname)))

    async def delete_database(self, dbname: str) -> httpx.Response:
        return await self.send(UpstreamRequest(method="DELETE", path=compose_path(dbname=dbname)))

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def put_document(
        self, dbname: str, docid: str, body: bytes, rev: Optional[str] = None
    ) -> httpx.Response:
        """Forward the document JSON byte-for-byte."""
        return await self.send(
            UpstreamRequest(
                method="PUT",
                path=compose_path(dbname=dbname, docid=docid),
                params=_rev_params(rev),
                content=body,
                content_type=DOCUMENT_CONTENT_TYPE,
            )
        )

    async def get_document(
        self, dbname: str, docid: str, rev: Optional[str] = None
    ) -> httpx.Response:
        return await self.send(
            UpstreamRequest(
                method="GET",
                path=compose_path(dbname=dbname, docid=docid),
                params=_rev_params(rev),
            )
        )

    # ------------------------------------------------------------------
    # Attachments
    # ------------------------------------------------------------------

    async def put_attachment(
        self,
        dbname: str,
        docid: str,
        attname: str,
        rev: str,
        stream: AsyncIterable[bytes],
        content_length: int,
    ) -> httpx.Response:
        """
        Stream an attachment body to the upstream.

        The Content-Length header is set from `content_length` before any
        byte is copied; the body is never buffered.
        """
        return await self.send(
            UpstreamRequest(
                method="PUT",
                path=compose_path(dbname=dbname, docid=docid, attname=attname),
                params={"rev": rev},
                stream=stream,
                content_type=ATTACHMENT_CONTENT_TYPE,
                content_length=content_length,
                timeout=self.attachment_timeout,
            )
        )

    async def open_attachment(self, dbname: str, docid: str, attname: str) -> httpx.Response:
        """
        Open an attachment for streaming.

        The returned response body is unread; the caller must close it.
        """
        return await self.send(
            UpstreamRequest(
                method="GET",
                path=compose_path(dbname=dbname, docid=docid, attname=attname),
                timeout=self.attachment_timeout,
            ),
            stream=True,
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def send(self, upstream_request: UpstreamRequest, stream: bool = False) -> httpx.Response:
        """
        Send one upstream request.

        Raises:
            UpstreamTimeoutError: connect/read/write/pool timeout
            UpstreamUnreachableError: any other transport failure
        """
        headers = upstream_request.headers
        request_id = get_request_id()
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id

        build_kwargs: Dict = {"headers": headers}
        if upstream_request.params:
            build_kwargs["params"] = upstream_request.params
        if upstream_request.content is not None:
            build_kwargs["content"] = upstream_request.content
        elif upstream_request.stream is not None:
            build_kwargs["content"] = upstream_request.stream
        if upstream_request.timeout is not None:
            build_kwargs["timeout"] = upstream_request.timeout

        request = self.client.build_request(
            upstream_request.method, upstream_request.path, **build_kwargs
        )

        try:
            response = await self.client.send(request, stream=stream)
        except httpx.TimeoutException as e:
            logger.error(
                f"Upstream call timed out: {upstream_request.method} /{upstream_request.path}",
                extra={
                    "target_path": upstream_request.path,
                    "method": upstream_request.method,
                    "error_type": type(e).__name__,
                    "error_detail": str(e),
                },
            )
            raise UpstreamTimeoutError(upstream_request.path, e) from e
        except httpx.RequestError as e:
            logger.error(
                f"Upstream call failed: {upstream_request.method} /{upstream_request.path}",
                extra={
                    "target_path": upstream_request.path,
                    "method": upstream_request.method,
                    "error_type": type(e).__name__,
                    "error_detail": str(e),
                },
            )
            raise UpstreamUnreachableError(upstream_request.path, e) from e

        logger.debug(
            f"{upstream_request.method} /{upstream_request.path} -> {response.status_code}",
            extra={"target_path": upstream_request.path, "status": response.status_code},
        )
        return response


def _rev_params(rev: Optional[str]) -> Dict[str, str]:
    return {"rev": rev} if rev else {}
