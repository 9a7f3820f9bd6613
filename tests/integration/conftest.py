"""Integration test fixtures.

Runs the real FastAPI app and the real upstream clients; only the network is
replaced, by httpx.MockTransport handlers that play Spotify and QQ Music.
"""

import httpx
import pytest

from artwork.credentials import SettingsCredentialProvider
from artwork.spotify import SpotifyClient
from config.settings import Settings
from songs.qqmusic import QQMusicClient


class FakeUpstream:
    """Routes requests by URL path to canned handlers and records every call."""

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []

    def on(self, path, handler):
        self.routes[path] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"error": "no route"})
        return handler(request)

    def paths(self):
        return [request.url.path for request in self.requests]


@pytest.fixture
def spotify_upstream():
    return FakeUpstream()


@pytest.fixture
def qqmusic_upstream():
    return FakeUpstream()


@pytest.fixture
def integration_app(spotify_upstream, qqmusic_upstream):
    from config.settings import get_settings
    from core.dependencies import (
        get_credential_provider,
        get_posthog_client,
        get_qqmusic_client,
        get_spotify_client,
    )
    from main import app

    settings = Settings(
        spotify_web_api_client_id="client-id",
        spotify_web_api_client_secret="client-secret",
        enable_telemetry=False,
        posthog_api_key=None,
        sentry_dsn=None,
    )
    spotify = SpotifyClient(transport=httpx.MockTransport(spotify_upstream))
    qqmusic = QQMusicClient(transport=httpx.MockTransport(qqmusic_upstream))
    provider = SettingsCredentialProvider(settings)

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_credential_provider] = lambda: provider
    app.dependency_overrides[get_spotify_client] = lambda: spotify
    app.dependency_overrides[get_qqmusic_client] = lambda: qqmusic
    app.dependency_overrides[get_posthog_client] = lambda: None
    try:
        yield app
    finally:
        app.dependency_overrides.clear()
