"""Unit tests for artwork/credentials.py."""

import pytest

from artwork.credentials import SettingsCredentialProvider
from config.settings import Settings
from core.exceptions import ConfigurationError


class TestSettingsCredentialProvider:
    @pytest.mark.asyncio
    async def test_returns_configured_credentials(self):
        settings = Settings(spotify_web_api_client_id="id", spotify_web_api_client_secret="secret")
        credentials = await SettingsCredentialProvider(settings).get_credentials()
        assert credentials.client_id == "id"
        assert credentials.client_secret == "secret"

    @pytest.mark.asyncio
    async def test_missing_client_id(self, mock_settings):
        mock_settings.spotify_web_api_client_secret = "secret"
        with pytest.raises(ConfigurationError, match="client ID"):
            await SettingsCredentialProvider(mock_settings).get_credentials()

    @pytest.mark.asyncio
    async def test_missing_client_secret(self, mock_settings):
        mock_settings.spotify_web_api_client_id = "id"
        with pytest.raises(ConfigurationError, match="client secret"):
            await SettingsCredentialProvider(mock_settings).get_credentials()
