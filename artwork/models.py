"""Pydantic models for the artwork pipeline."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

THIRTY_DAYS_SECONDS = 30 * 24 * 60 * 60


class SizeClass(str, Enum):
    """Artwork size requested by the caller."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


SIZE_PIXELS: dict[SizeClass, tuple[int, int]] = {
    SizeClass.SMALL: (64, 64),
    SizeClass.MEDIUM: (300, 300),
    SizeClass.LARGE: (640, 640),
}


def size_to_pixels(size: SizeClass) -> tuple[int, int]:
    """Exact (width, height) an image must have to satisfy ``size``."""
    return SIZE_PIXELS[size]


class ArtworkQuery(BaseModel):
    """Inbound artwork request."""

    model_config = ConfigDict(frozen=True)

    title: str
    artist: str
    size: SizeClass


class ClientCredentials(BaseModel):
    """Client id/secret pair for the client-credentials token flow."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str


class CatalogImage(BaseModel):
    """A single album image as listed by the catalog."""

    url: str
    width: int | None = None
    height: int | None = None


class CatalogAlbum(BaseModel):
    """The album slice of a track search result."""

    name: str = ""
    images: list[CatalogImage] = []


class CatalogTrack(BaseModel):
    """A single track from a track search."""

    id: str | None = None
    name: str = ""
    album: CatalogAlbum


class RedirectTarget(BaseModel):
    """Where to send the caller, and for how long the redirect may be cached."""

    url: str
    max_age: int = THIRTY_DAYS_SECONDS
