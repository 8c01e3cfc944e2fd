"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AniListSettings(BaseModel):
    """AniList GraphQL API configuration."""

    api_url: str = "https://graphql.anilist.co"

    # User access token (ANILIST__TOKEN); required by the production provider
    token: str | None = None

    # Request timeout in seconds
    timeout: float = 30.0

    # Threads and top-level comments fetched per request
    page_size: int = 50


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables (or a `.env` file) to override, using `__`
    for nested sections:

        ENVIRONMENT=development
        PORT=8000
        ANILIST__TOKEN=<access token>
        OBSERVABILITY__LOGFIRE_TOKEN=<logfire token>
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows ANILIST__TOKEN syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "localhost"
    port: int = 8000

    # Nested settings
    anilist: AniListSettings = AniListSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @computed_field
    @property
    def base_url(self) -> str:
        """Base URL of the local API server."""
        return f"http://{self.host}:{self.port}"
