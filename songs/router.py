"""Song search API router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from posthog import Posthog

from core.dependencies import get_posthog_client, get_qqmusic_client
from core.responses import failure_to_http_exception
from core.result import Failure
from core.telemetry import RequestTelemetry
from songs.models import SongBatch, SongSearchQuery
from songs.qqmusic import QQMusicClient
from songs.resolver import resolve_songs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/song", tags=["song"])


@router.get(
    "/search",
    response_model=SongBatch,
    summary="Search songs by title with a lyrics excerpt",
    description="""
    Keyword-searches QQ Music for the title, takes the first three matches and,
    for each, fetches its lyrics and keeps the first five lyric lines (tags,
    credit lines and lines repeating the title removed).
    """,
    responses={
        200: {"description": "Songs matching the title"},
        400: {"description": "Empty title"},
        500: {"description": "QQ Music error or malformed upstream data"},
    },
)
async def search_song(
    title: str = Query(..., description="Title of the song to search for"),
    qqmusic: QQMusicClient = Depends(get_qqmusic_client),
    posthog_client: Posthog | None = Depends(get_posthog_client),
) -> SongBatch:
    """Search songs and return their metadata with lyrics fragments."""
    if not title.strip():
        raise HTTPException(status_code=400, detail="title must not be empty")

    telemetry = RequestTelemetry(pipeline="song_search")
    result = await resolve_songs(SongSearchQuery(title=title), qqmusic, telemetry)

    if posthog_client:
        telemetry.send_to_posthog(
            posthog_client,
            {
                "success": not isinstance(result, Failure),
                "results_count": 0 if isinstance(result, Failure) else len(result.value.songs),
            },
        )

    if isinstance(result, Failure):
        raise failure_to_http_exception(result)

    return result.value
