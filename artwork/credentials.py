"""Credential providers for the Spotify client-credentials flow."""

import logging
from typing import Protocol

from artwork.models import ClientCredentials
from config.settings import Settings
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    """Anything that can hand out Spotify client credentials."""

    async def get_credentials(self) -> ClientCredentials: ...


class SettingsCredentialProvider:
    """Reads the client id/secret from application settings.

    Settings map to the ``SPOTIFY_WEB_API_CLIENT_ID`` and
    ``SPOTIFY_WEB_API_CLIENT_SECRET`` environment variables.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    async def get_credentials(self) -> ClientCredentials:
        """Return the configured credentials.

        Raises:
            ConfigurationError: If the client id or secret is not set
        """
        if not self.settings.spotify_web_api_client_id:
            raise ConfigurationError("Failed to get client ID")
        if not self.settings.spotify_web_api_client_secret:
            raise ConfigurationError("Failed to get client secret")

        return ClientCredentials(
            client_id=self.settings.spotify_web_api_client_id,
            client_secret=self.settings.spotify_web_api_client_secret,
        )
