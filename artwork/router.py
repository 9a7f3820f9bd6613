"""Artwork API router."""

import logging

from fastapi import APIRouter, Depends, Query
from posthog import Posthog

from artwork.credentials import CredentialProvider
from artwork.models import ArtworkQuery, SizeClass
from artwork.resolver import resolve_artwork
from artwork.spotify import SpotifyClient
from config.settings import Settings, get_settings
from core.dependencies import get_credential_provider, get_posthog_client, get_spotify_client
from core.responses import failure_to_http_exception, redirect_response
from core.result import Failure
from core.telemetry import RequestTelemetry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["artwork"])


@router.get(
    "/artwork",
    summary="Redirect to album artwork for a song",
    description="""
    Acts as a proxy for the Spotify Web API artwork lookup.

    Searches for the first track matching both title and artist and redirects to
    its album image of exactly the requested size:
    - small: 64x64
    - medium: 300x300
    - large: 640x640

    The redirect is marked cacheable for 30 days.
    """,
    status_code=307,
    responses={
        307: {"description": "Redirect to the artwork URL"},
        404: {"description": "No track found for the given title and artist"},
        422: {"description": "Missing or invalid query parameters"},
        500: {"description": "Spotify error, missing credentials, or no image of that size"},
    },
)
async def get_artwork(
    title: str = Query(..., description="Title of the song"),
    artist: str = Query(..., description="Artist of the song"),
    size: SizeClass = Query(..., description="Artwork size: small, medium or large"),
    settings: Settings = Depends(get_settings),
    credential_provider: CredentialProvider = Depends(get_credential_provider),
    spotify: SpotifyClient = Depends(get_spotify_client),
    posthog_client: Posthog | None = Depends(get_posthog_client),
):
    """Resolve artwork and redirect to it."""
    query = ArtworkQuery(title=title, artist=artist, size=size)
    telemetry = RequestTelemetry(pipeline="artwork")

    result = await resolve_artwork(query, credential_provider, spotify, telemetry)

    if posthog_client:
        telemetry.send_to_posthog(
            posthog_client,
            {
                "size": size.value,
                "success": not isinstance(result, Failure),
                "error_kind": result.kind.value if isinstance(result, Failure) else None,
            },
        )

    if isinstance(result, Failure):
        raise failure_to_http_exception(result)

    return redirect_response(result.value, max_age=settings.artwork_cache_max_age)
