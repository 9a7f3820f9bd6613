"""Song metadata and lyrics resolution pipeline.

This module contains resolve_songs(), which runs:
keyword search -> take the first few matches -> per-match lyrics fetch ->
lyrics decode and excerpt -> batch assembly.

The batch is all-or-nothing: one bad entry or one failed lyrics call fails the
whole request, and no further lyrics calls are made after a failure.
"""

import logging
from typing import Any

from core.exceptions import MalformedResponseError, ProxyServiceError
from core.result import Failure, PipelineResult, Success
from core.sentry import capture_exception
from core.telemetry import RequestTelemetry
from songs.lyrics import decode_and_format_lyrics
from songs.models import RawSongEntry, SongBatch, SongRecord, SongSearchQuery
from songs.qqmusic import QQMusicClient

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 3


def _require_str(data: dict, key: str, label: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise MalformedResponseError(f"Failed to parse song {label}", details={"field": key})
    return value


def parse_song_entry(data: Any) -> RawSongEntry:
    """Extract title, first singer, album and song mid from a search entry.

    An empty singer list yields an empty artist.

    Raises:
        MalformedResponseError: If any required field is missing or mistyped
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("Failed to parse song entry")

    title = _require_str(data, "songname", "title")

    singers = data.get("singer")
    if not isinstance(singers, list):
        raise MalformedResponseError("Failed to parse song artist", details={"field": "singer"})
    artist = ""
    if singers and isinstance(singers[0], dict):
        name = singers[0].get("name")
        artist = name if isinstance(name, str) else ""

    album = _require_str(data, "albumname", "album")
    catalog_id = _require_str(data, "songmid", "mid")

    return RawSongEntry(title=title, artist=artist, album=album, catalog_id=catalog_id)


def select_entries(raw_entries: list, limit: int = MAX_BATCH_SIZE) -> list[RawSongEntry]:
    """Parse the first ``limit`` search entries, preserving order."""
    return [parse_song_entry(entry) for entry in raw_entries[:limit]]


async def resolve_songs(
    query: SongSearchQuery,
    qqmusic: QQMusicClient,
    telemetry: RequestTelemetry | None = None,
) -> PipelineResult[SongBatch]:
    """Search songs by title and attach a short lyrics excerpt to each match.

    Args:
        query: The title to search for
        qqmusic: QQ Music transport
        telemetry: Optional per-request step timer

    Returns:
        Success(SongBatch) with at most three songs in search order, or a single
        internal_error Failure.
    """
    telemetry = telemetry or RequestTelemetry(pipeline="song_search")

    try:
        with telemetry.track_step("keyword_search"):
            telemetry.record_api_call("qqmusic")
            raw_entries = await qqmusic.search_songs(query.title)

        entries = select_entries(raw_entries)

        songs: list[SongRecord] = []
        for entry in entries:
            with telemetry.track_step("lyrics_fetch"):
                telemetry.record_api_call("qqmusic")
                raw_lyrics = await qqmusic.fetch_lyrics(entry.catalog_id)

            songs.append(
                SongRecord(
                    title=entry.title,
                    artist=entry.artist,
                    album=entry.album,
                    lyrics_fragment=decode_and_format_lyrics(entry.title, raw_lyrics),
                )
            )
    except ProxyServiceError as e:
        logger.error(f"Song search failed for '{query.title}': {e.message}")
        return Failure.internal(e.message)
    except Exception as e:
        logger.exception(f"Unexpected error resolving songs: {e}")
        capture_exception(e, {"title": query.title})
        return Failure.internal("Internal server error")

    logger.info(f"Resolved {len(songs)} songs for '{query.title}'")
    return Success(SongBatch(songs=songs))
