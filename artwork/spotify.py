"""Spotify Web API client: client-credentials token and track search."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from artwork.models import CatalogTrack, ClientCredentials
from core.exceptions import (
    MalformedResponseError,
    TokenAcquisitionError,
    UnexpectedSearchResultError,
    UpstreamRequestError,
)
from core.sentry import add_upstream_breadcrumb

logger = logging.getLogger(__name__)

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"


def build_track_query(title: str, artist: str) -> str:
    """Search expression filtering on both track title and artist."""
    return f"track:{title} artist:{artist}"


class SpotifyClient:
    """Thin async wrapper over the two Spotify endpoints the artwork pipeline needs.

    The client holds no per-request state: every token is requested fresh and
    handed back to the caller.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests to fake Spotify)
        """
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": "SongArtworkProxy/1.0"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def request_token(self, credentials: ClientCredentials) -> str:
        """Exchange client credentials for an access token.

        Raises:
            TokenAcquisitionError: On transport failure, non-2xx status or a
                response without ``access_token``
        """
        client = await self._get_client()
        add_upstream_breadcrumb("spotify", "request_token")

        try:
            response = await client.post(
                SPOTIFY_TOKEN_URL,
                data={"grant_type": "client_credentials"},
                auth=(credentials.client_id, credentials.client_secret),
            )
            response.raise_for_status()
            token = response.json()["access_token"]
        except httpx.HTTPError as e:
            raise TokenAcquisitionError(f"token acquisition failed: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise TokenAcquisitionError(f"token acquisition failed: malformed token response ({e})") from e

        if not isinstance(token, str) or not token:
            raise TokenAcquisitionError("token acquisition failed: empty access token")
        return token

    async def search_tracks(self, token: str, query: str) -> list[CatalogTrack]:
        """Run a track-only search.

        Args:
            token: Access token from ``request_token``
            query: Search expression (see ``build_track_query``)

        Returns:
            Tracks in upstream ranking order (possibly empty)

        Raises:
            UpstreamRequestError: On transport failure or non-2xx status
            UnexpectedSearchResultError: If the payload carries no ``tracks`` page
            MalformedResponseError: If the payload cannot be parsed
        """
        client = await self._get_client()
        params = {"q": query, "type": "track"}

        add_upstream_breadcrumb("spotify", "search_tracks", {"query": query})
        logger.info(f"Searching Spotify tracks: '{query}'")

        try:
            response = await client.get(
                f"{SPOTIFY_API_BASE}/search",
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamRequestError(f"Failed to search for artwork: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Failed to parse search response: {e}") from e

        if not isinstance(data, dict) or "tracks" not in data:
            kinds = sorted(data) if isinstance(data, dict) else type(data).__name__
            raise UnexpectedSearchResultError(
                "unexpected search result kind", details={"kinds": kinds}
            )

        page = data["tracks"]
        items = page.get("items") if isinstance(page, dict) else None
        if not isinstance(items, list):
            raise MalformedResponseError("Failed to parse search response: no track items")

        try:
            return [CatalogTrack.model_validate(item) for item in items]
        except ValidationError as e:
            raise MalformedResponseError(f"Failed to parse search response: {e}") from e

    async def check_api(self, credentials: ClientCredentials) -> bool:
        """Check Spotify connectivity by acquiring a token."""
        try:
            await self.request_token(credentials)
            return True
        except TokenAcquisitionError:
            return False
