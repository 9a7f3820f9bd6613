"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Spotify Web API credentials (artwork pipeline)
    spotify_web_api_client_id: str | None = Field(
        None, description="Spotify Web API client ID for artwork lookup"
    )
    spotify_web_api_client_secret: str | None = Field(
        None, description="Spotify Web API client secret for artwork lookup"
    )

    # Upstream Configuration
    upstream_timeout: float = Field(
        default=10.0, description="Timeout in seconds for each upstream HTTP request"
    )
    artwork_cache_max_age: int = Field(
        default=2592000, description="Cache-Control max-age for artwork redirects (default: 30 days)"
    )

    # Application Configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to run the server on")
    log_level: str = Field(default="INFO", description="Logging level")
    cors_allow_origins: list[str] = Field(
        default=["*"], description="Origins allowed to call the API from a browser"
    )

    # Feature Flags
    enable_telemetry: bool = Field(default=True, description="Enable PostHog telemetry")

    # PostHog Configuration
    posthog_api_key: str | None = Field(None, description="PostHog API key for telemetry")
    posthog_host: str = Field(default="https://us.i.posthog.com", description="PostHog host URL")

    # Sentry Configuration
    sentry_dsn: str | None = Field(None, description="Sentry DSN for error tracking")

    # Application Metadata
    app_name: str = Field(default="Song-Artwork-Proxy", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def has_spotify_credentials(self) -> bool:
        """Whether both Spotify client credentials are set."""
        return bool(self.spotify_web_api_client_id and self.spotify_web_api_client_secret)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
