from __future__ import annotations

import logging
from typing import Optional

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AgentSettings(BaseSettings):
    """Settings of the shipping agent, read from the environment."""

    # ------------------------------------------------------------------
    # Relay
    # ------------------------------------------------------------------
    endpoint_url: str
    log_secret: SecretStr
    poll_interval: float = Field(15.0, gt=0)
    failure_threshold: int = Field(3, ge=1)
    # Bound for every outbound call; falls back to the poll interval.
    request_timeout: Optional[float] = Field(None, gt=0)

    # ------------------------------------------------------------------
    # Orchestration (GitHub Actions)
    # ------------------------------------------------------------------
    github_api_url: str = "https://api.github.com"
    github_repository: Optional[str] = None
    github_token: Optional[SecretStr] = None

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    logging_level: int = logging.INFO

    model_config = SettingsConfigDict(
        validate_assignment=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_secret(self) -> "AgentSettings":
        if not self.log_secret.get_secret_value():
            raise ValueError("LOG_SECRET must not be empty")
        return self

    @property
    def timeout(self) -> float:
        """Effective timeout of fetch and push calls."""
        return self.request_timeout or self.poll_interval
