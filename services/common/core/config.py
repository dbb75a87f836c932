"""
Common Configuration
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class BaseAppConfig(BaseSettings):
    """
    Common application settings.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    VERIFY_SSL: bool = Field(default=False, description="Whether to verify SSL certificates")

    # ===== Upstream Connection Pool =====
    HTTP_MAX_CONNECTIONS: int = Field(
        default=100, description="Maximum number of pooled upstream connections"
    )
    HTTP_MAX_KEEPALIVE_CONNECTIONS: int = Field(
        default=20, description="Maximum number of idle keep-alive connections"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )
