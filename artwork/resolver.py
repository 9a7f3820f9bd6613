"""Artwork resolution pipeline.

credentials -> access token -> track search -> exact-size image selection.
Every stage either succeeds or ends the invocation with a single ``Failure``;
there are no retries.
"""

import logging
from collections.abc import Iterable

from artwork.credentials import CredentialProvider
from artwork.models import ArtworkQuery, CatalogImage, RedirectTarget, SizeClass, size_to_pixels
from artwork.spotify import SpotifyClient, build_track_query
from core.exceptions import (
    ConfigurationError,
    ProxyServiceError,
    TokenAcquisitionError,
)
from core.result import Failure, PipelineResult, Success
from core.sentry import capture_exception
from core.telemetry import RequestTelemetry

logger = logging.getLogger(__name__)


def select_image(images: Iterable[CatalogImage], size: SizeClass) -> CatalogImage | None:
    """First image whose width and height both equal the size class exactly."""
    width, height = size_to_pixels(size)
    for image in images:
        if image.width == width and image.height == height:
            return image
    return None


async def resolve_artwork(
    query: ArtworkQuery,
    credential_provider: CredentialProvider,
    spotify: SpotifyClient,
    telemetry: RequestTelemetry | None = None,
) -> PipelineResult[RedirectTarget]:
    """Resolve an artwork query to a redirect target.

    Args:
        query: Title, artist and size class
        credential_provider: Source of the Spotify client id/secret
        spotify: Spotify transport
        telemetry: Optional per-request step timer

    Returns:
        Success(RedirectTarget) with the image URL, or Failure. ``not_found`` is
        reserved for searches that match no track at all.
    """
    telemetry = telemetry or RequestTelemetry(pipeline="artwork")

    try:
        with telemetry.track_step("credentials"):
            credentials = await credential_provider.get_credentials()

        with telemetry.track_step("token"):
            telemetry.record_api_call("spotify")
            token = await spotify.request_token(credentials)

        with telemetry.track_step("track_search"):
            telemetry.record_api_call("spotify")
            tracks = await spotify.search_tracks(
                token, build_track_query(query.title, query.artist)
            )
    except ConfigurationError as e:
        logger.error(f"Spotify credentials unavailable: {e.message}")
        return Failure.internal(e.message)
    except TokenAcquisitionError as e:
        logger.error(f"Spotify token request failed: {e.message}")
        return Failure.internal(e.message)
    except ProxyServiceError as e:
        logger.error(f"Artwork search failed for '{query.title}' by '{query.artist}': {e.message}")
        return Failure.internal(e.message)
    except Exception as e:
        logger.exception(f"Unexpected error resolving artwork: {e}")
        capture_exception(e, {"title": query.title, "artist": query.artist})
        return Failure.internal("Internal server error")

    if not tracks:
        # Expected for bad or obscure queries.
        logger.info(f"No track found for title '{query.title}' and artist '{query.artist}'")
        return Failure.not_found(
            f"No track found for song with title: {query.title} and artist: {query.artist}"
        )

    track = tracks[0]
    with telemetry.track_step("image_select"):
        image = select_image(track.album.images, query.size)

    if image is None:
        width, height = size_to_pixels(query.size)
        logger.warning(
            f"No {width}x{height} image for track '{track.name}' "
            f"({len(track.album.images)} images listed)"
        )
        return Failure.internal("No image found")

    logger.info(f"Resolved {query.size.value} artwork for '{query.title}': {image.url}")
    return Success(RedirectTarget(url=image.url))
