from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """Settings of the log ingestion service."""

    # ------------------------------------------------------------------
    # FastAPI metadata
    # ------------------------------------------------------------------
    debug: bool = False
    docs_url: str = "/docs"
    openapi_url: str = "/openapi.json"
    redoc_url: str = "/redoc"
    title: str = "Log Relay Ingestion Service"
    version: str = "0.1.0"
    api_prefix: str = "/api/v1.0"

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    server_host: str = "0.0.0.0"
    server_port: int = 8888

    # ------------------------------------------------------------------
    # Redis
    # ------------------------------------------------------------------
    redis_user: Optional[str] = None
    redis_pass: Optional[str] = None
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    # Shared HMAC secret. Left unset, every push is rejected.
    log_secret: Optional[SecretStr] = None

    # ------------------------------------------------------------------
    # Hosts / CORS
    # ------------------------------------------------------------------
    allowed_hosts: List[str] = ["*"]

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    logging_level: int = logging.INFO
    log_path: Optional[str] = None
    loggers: Tuple[str, str] = ("uvicorn.asgi", "uvicorn.access")

    model_config = SettingsConfigDict(
        validate_assignment=True,
        extra="ignore",  # ignore unknown env vars
    )

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------
    @property
    def redis_url(self) -> str:
        """Assemble a Redis DSN."""
        if self.redis_user and self.redis_pass:
            return (
                f"redis://{self.redis_user}:{self.redis_pass}"
                f"@{self.redis_host}:{self.redis_port}/{self.redis_db}"
            )
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    @property
    def fastapi_kwargs(self) -> Dict[str, Any]:
        """Parameters forwarded to ``FastAPI()`` ctor."""
        return {
            "debug": self.debug,
            "docs_url": self.docs_url,
            "openapi_url": self.openapi_url,
            "redoc_url": self.redoc_url,
            "title": self.title,
            "version": self.version,
        }
