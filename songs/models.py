"""Pydantic models for the song search pipeline."""

from pydantic import BaseModel, ConfigDict


class SongSearchQuery(BaseModel):
    """Inbound song search request."""

    model_config = ConfigDict(frozen=True)

    title: str


class RawSongEntry(BaseModel):
    """One keyword-search match, before its lyrics are fetched."""

    title: str
    artist: str
    album: str
    catalog_id: str


class SongRecord(BaseModel):
    """Describes info about a song searched from the catalog."""

    title: str
    artist: str
    album: str
    lyrics_fragment: str  # first five lyric lines


class SongBatch(BaseModel):
    """Songs that match the searched title, in upstream order."""

    songs: list[SongRecord] = []
