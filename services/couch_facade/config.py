"""
Facade configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys

from pydantic import Field
from services.common.core.config import BaseAppConfig


class FacadeConfig(BaseAppConfig):
    """
    Configuration management for the CouchDB facade service.
    """

    # Server settings
    UVICORN_BIND_ADDR: str = Field(default="0.0.0.0:8000", description="Listen address")

    # Upstream (required from env)
    COUCHDB_URL: str = Field(..., min_length=1, description="Base address of the upstream CouchDB")

    # Upstream timeouts
    UPSTREAM_TIMEOUT: float = Field(default=30.0, gt=0, description="Per-call timeout (seconds)")
    UPSTREAM_CONNECT_TIMEOUT: float = Field(
        default=5.0, gt=0, description="Upstream connect timeout (seconds)"
    )
    ATTACHMENT_TIMEOUT: float = Field(
        default=300.0, gt=0, description="Read/write timeout for attachment transfers (seconds)"
    )

    # FastAPI settings
    root_path: str = Field(default="", description="API root path (for proxy)")

    # model_config is inherited


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = FacadeConfig()
except Exception as e:
    # Fail fast: the upstream address has no sensible default.
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
