"""FastAPI dependency injection providers."""

import logging

from fastapi import Depends
from posthog import Posthog

from artwork.credentials import CredentialProvider, SettingsCredentialProvider
from artwork.spotify import SpotifyClient
from config.settings import Settings, get_settings
from songs.qqmusic import QQMusicClient

logger = logging.getLogger(__name__)

# Module-level instances for lifecycle management
_spotify_client: SpotifyClient | None = None
_qqmusic_client: QQMusicClient | None = None
_posthog_client: Posthog | None = None


def get_credential_provider(settings: Settings = Depends(get_settings)) -> CredentialProvider:
    """Get the Spotify credential provider backed by application settings."""
    return SettingsCredentialProvider(settings)


def get_spotify_client(settings: Settings = Depends(get_settings)) -> SpotifyClient:
    """Get the shared Spotify client.

    Args:
        settings: Application settings

    Returns:
        SpotifyClient: Client reused across requests for connection pooling
    """
    global _spotify_client

    if _spotify_client is None:
        _spotify_client = SpotifyClient(timeout=settings.upstream_timeout)
        logger.info(f"Spotify client initialized (timeout: {settings.upstream_timeout}s)")

    return _spotify_client


def get_qqmusic_client(settings: Settings = Depends(get_settings)) -> QQMusicClient:
    """Get the shared QQ Music client.

    Args:
        settings: Application settings

    Returns:
        QQMusicClient: Client reused across requests for connection pooling
    """
    global _qqmusic_client

    if _qqmusic_client is None:
        _qqmusic_client = QQMusicClient(timeout=settings.upstream_timeout)
        logger.info(f"QQ Music client initialized (timeout: {settings.upstream_timeout}s)")

    return _qqmusic_client


async def close_upstream_clients() -> None:
    """Close the HTTP clients of both upstream services."""
    global _spotify_client
    global _qqmusic_client
    if _spotify_client:
        await _spotify_client.close()
        _spotify_client = None
    if _qqmusic_client:
        await _qqmusic_client.close()
        _qqmusic_client = None


def get_posthog_client(settings: Settings = Depends(get_settings)) -> Posthog | None:
    """Get PostHog client instance.

    Args:
        settings: Application settings

    Returns:
        Optional[Posthog]: PostHog client if configured and enabled, None otherwise
    """
    global _posthog_client

    if not settings.enable_telemetry:
        logger.debug("Telemetry disabled")
        return None

    if not settings.posthog_api_key:
        logger.debug("POSTHOG_API_KEY not set - telemetry disabled")
        return None

    if _posthog_client is None:
        _posthog_client = Posthog(
            project_api_key=settings.posthog_api_key,
            host=settings.posthog_host,
        )
        logger.info(f"PostHog client initialized (host: {settings.posthog_host})")

    return _posthog_client


def flush_posthog() -> None:
    """Flush any buffered PostHog events."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.flush()


def shutdown_posthog() -> None:
    """Shutdown PostHog client gracefully."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.shutdown()
        _posthog_client = None
        logger.info("PostHog client shutdown")
