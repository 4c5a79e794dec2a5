"""Workflow engine settings loaded from ``N8N_*`` environment variables."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkflowSettings(BaseSettings):
    """Connection settings for the n8n workflow engine.

    ``N8N_BASE_URL`` defaults to a local instance; ``N8N_API_KEY`` is
    optional and only sent when present.
    """

    model_config = SettingsConfigDict(
        env_prefix="N8N_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = "http://localhost:5678"
    api_key: SecretStr | None = None
    timeout_seconds: float = Field(default=120.0, gt=0)

    @property
    def api_root(self) -> str:
        return f"{self.base_url.rstrip('/')}/api/v1"
