"""
CouchDB Facade - constrained CouchDB-compatible HTTP surface

Exposes database lifecycle, document and attachment operations and forwards
each request to a single upstream CouchDB instance, relaying status codes,
bodies and headers back to the caller.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI

from .api.routes import build_router
from .config import FacadeConfig, config
from .core.logging_config import setup_logging
from .exceptions import register_exception_handlers
from .lifecycle import manage_lifespan
from .middleware import request_id_middleware

# Logger setup
setup_logging()
logger = logging.getLogger("facade.main")

HEALTH_PATH = "/_facade/health"


async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


def create_app(facade_config: FacadeConfig) -> FastAPI:
    """Assemble the facade application for the given configuration."""

    def lifespan(app: FastAPI):
        return manage_lifespan(app, facade_config)

    app = FastAPI(
        title="CouchDB Facade",
        version="1.0.0",
        lifespan=lifespan,
        root_path=facade_config.root_path,
    )

    app.middleware("http")(request_id_middleware)
    register_exception_handlers(app)

    # Registered first: "/_facade/health" would otherwise match "/{dbname}/{docid}".
    app.add_api_route(HEALTH_PATH, health_check, methods=["GET"])
    app.include_router(build_router())

    return app


app = create_app(config)


def run() -> None:
    import uvicorn

    host, _, port = config.UVICORN_BIND_ADDR.rpartition(":")
    uvicorn.run(app, host=host or "0.0.0.0", port=int(port))


if __name__ == "__main__":
    run()
