"""
Where: services/couch_facade/lifecycle.py
What: Facade startup/shutdown orchestration for the shared upstream client.
Why: Keep main.py focused on app assembly while preserving lifecycle behavior.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from services.common.core.http_client import HttpClientFactory

from .client import CouchDbClient
from .config import FacadeConfig

logger = logging.getLogger("facade.main")


def build_couchdb_client(facade_config: FacadeConfig) -> CouchDbClient:
    """Create the pooled upstream client bound to the configured base address."""
    factory = HttpClientFactory(facade_config)
    factory.configure_global_settings()
    http_client = factory.create_async_client(
        base_url=facade_config.COUCHDB_URL,
        timeout=httpx.Timeout(
            facade_config.UPSTREAM_TIMEOUT, connect=facade_config.UPSTREAM_CONNECT_TIMEOUT
        ),
        # Relayed bodies must be the upstream's bytes, never transparently decoded.
        headers={"Accept-Encoding": "identity"},
    )
    return CouchDbClient(
        http_client,
        attachment_timeout=httpx.Timeout(
            facade_config.ATTACHMENT_TIMEOUT, connect=facade_config.UPSTREAM_CONNECT_TIMEOUT
        ),
    )


@asynccontextmanager
async def manage_lifespan(app: FastAPI, facade_config: FacadeConfig) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    couchdb_client = build_couchdb_client(facade_config)
    try:
        app.state.couchdb_client = couchdb_client
        logger.info(
            "Facade initialized, forwarding to %s",
            couchdb_client.client.base_url.host,
        )
        yield
    finally:
        logger.info("Facade shutting down, closing upstream client.")
        await couchdb_client.aclose()
