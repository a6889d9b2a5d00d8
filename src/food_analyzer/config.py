"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str
    openai_model: str = "gpt-4o"
    openai_temperature: float = 0.2
    openai_max_tokens: int | None = 1000
    upstream_timeout_seconds: float = 180.0
    output_format: Literal["server", "client"] = "server"
    revision_api_key: str | None = None
    revision_base_url: str | None = "https://api.deepseek.com/v1"
    revision_model: str = "deepseek-chat"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def is_local(self) -> bool:
        """Return true when running in the local environment."""
        return self.environment == "local"
