"""Shared test fixtures for pytest."""

from unittest.mock import AsyncMock

import pytest

from artwork.credentials import SettingsCredentialProvider
from artwork.models import ArtworkQuery, SizeClass
from artwork.spotify import SpotifyClient
from config.settings import Settings
from songs.qqmusic import QQMusicClient


@pytest.fixture
def credential_provider():
    """Credential provider backed by settings with test credentials."""
    settings = Settings(
        spotify_web_api_client_id="test-client-id",
        spotify_web_api_client_secret="test-client-secret",
    )
    return SettingsCredentialProvider(settings)


@pytest.fixture
def mock_spotify_client():
    """Create a mock Spotify client that hands out a token and finds nothing."""
    client = AsyncMock(spec=SpotifyClient)
    client.request_token = AsyncMock(return_value="test-token")
    client.search_tracks = AsyncMock(return_value=[])
    client.check_api = AsyncMock(return_value=True)
    return client


@pytest.fixture
def mock_qqmusic_client():
    """Create a mock QQ Music client that finds nothing."""
    client = AsyncMock(spec=QQMusicClient)
    client.search_songs = AsyncMock(return_value=[])
    client.fetch_lyrics = AsyncMock()
    client.check_api = AsyncMock(return_value=True)
    return client


@pytest.fixture
def medium_query():
    """Artwork query for a well-known song at medium size."""
    return ArtworkQuery(title="Bohemian Rhapsody", artist="Queen", size=SizeClass.MEDIUM)
