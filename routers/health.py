"""Health check router with upstream connectivity checks."""

import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from artwork.credentials import CredentialProvider
from artwork.spotify import SpotifyClient
from config.settings import Settings, get_settings
from core.dependencies import get_credential_provider, get_qqmusic_client, get_spotify_client
from core.exceptions import ConfigurationError
from songs.qqmusic import QQMusicClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

CHECK_TIMEOUT = 3.0


async def _check_spotify(
    credential_provider: CredentialProvider, spotify: SpotifyClient
) -> str:
    """Acquire a Spotify token with the configured credentials."""
    try:
        credentials = await credential_provider.get_credentials()
    except ConfigurationError:
        return "unavailable"
    return "ok" if await spotify.check_api(credentials) else "error"


async def _check_qqmusic(qqmusic: QQMusicClient) -> str:
    """Ping the QQ Music lyrics endpoint."""
    return "ok" if await qqmusic.check_api() else "error"


async def _run_check(coro) -> str:
    """Run a single health check with a timeout."""
    try:
        return await asyncio.wait_for(coro, timeout=CHECK_TIMEOUT)
    except asyncio.TimeoutError:
        return "timeout"


@router.get(
    "/health",
    summary="Health check",
    responses={
        200: {"description": "Service is healthy or degraded"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
    credential_provider: CredentialProvider = Depends(get_credential_provider),
    spotify: SpotifyClient = Depends(get_spotify_client),
    qqmusic: QQMusicClient = Depends(get_qqmusic_client),
):
    """Health check with real connectivity probes for every upstream."""
    results = await asyncio.gather(
        _run_check(_check_spotify(credential_provider, spotify)),
        _run_check(_check_qqmusic(qqmusic)),
    )

    services = {
        "spotify": results[0],
        "qqmusic": results[1],
    }

    if all(v in ("ok", "unavailable") for v in services.values()):
        status = "healthy"
    else:
        status = "degraded"
        logger.warning(f"Health check degraded: {services}")

    body = {
        "status": status,
        "version": settings.app_version,
        "services": services,
    }

    return JSONResponse(content=body, status_code=200)
