import os

import httpx
import pytest
import pytest_asyncio
import respx
from fastapi.testclient import TestClient

# Config is initialized at import time, so set the environment at top level.
os.environ.setdefault("COUCHDB_URL", "http://couchdb.test:5984")
os.environ.setdefault("LOG_CONFIG_PATH", "/tmp/couch-facade-missing-logging.yml")

UPSTREAM_URL = os.environ["COUCHDB_URL"]


@pytest.fixture
def facade_config():
    from services.couch_facade.config import FacadeConfig

    return FacadeConfig(_env_file=None, COUCHDB_URL=UPSTREAM_URL)


@pytest.fixture
def main_app(facade_config):
    from services.couch_facade.main import create_app

    return create_app(facade_config)


@pytest.fixture
def upstream():
    """Mocked upstream CouchDB; unmatched calls fail the test."""
    with respx.mock(base_url=UPSTREAM_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def client(main_app, upstream):
    """TestClient with the lifespan running (real pooled client, mocked transport)."""
    with TestClient(main_app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def async_client(main_app):
    """In-process async client; the lifespan is not run, inject dependencies explicitly."""
    transport = httpx.ASGITransport(app=main_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://facade.test") as ac:
        yield ac
    main_app.dependency_overrides = {}
