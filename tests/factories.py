"""Shared test factories for upstream payloads and models."""

import base64

from artwork.models import CatalogAlbum, CatalogImage, CatalogTrack

STANDARD_SIZES = [(640, 640), (300, 300), (64, 64)]


def make_image_payload(width=300, height=300, url=None):
    """Build a Spotify image object."""
    return {
        "url": url or f"https://i.scdn.co/image/{width}x{height}",
        "width": width,
        "height": height,
    }


def make_track_payload(name="Bohemian Rhapsody", sizes=None, track_id="track-1"):
    """Build a Spotify track object whose album lists images of the given sizes."""
    sizes = STANDARD_SIZES if sizes is None else sizes
    return {
        "id": track_id,
        "name": name,
        "album": {
            "name": "A Night at the Opera",
            "images": [make_image_payload(w, h) for w, h in sizes],
        },
    }


def make_track_search_payload(*tracks):
    """Build a Spotify /search response holding a tracks page."""
    return {"tracks": {"items": list(tracks), "total": len(tracks)}}


def make_catalog_track(sizes=None, name="Bohemian Rhapsody"):
    """Build a parsed CatalogTrack."""
    sizes = STANDARD_SIZES if sizes is None else sizes
    return CatalogTrack(
        id="track-1",
        name=name,
        album=CatalogAlbum(
            name="A Night at the Opera",
            images=[
                CatalogImage(url=f"https://i.scdn.co/image/{w}x{h}", width=w, height=h)
                for w, h in sizes
            ],
        ),
    )


def make_song_entry(title="晴天", singer="周杰伦", album="叶惠美", songmid="0039MnYb0qxYhV", **kwargs):
    """Build a QQ Music keyword-search entry."""
    if singer is None:
        singers = []
    elif isinstance(singer, str):
        singers = [{"name": singer, "mid": "0025NhlN2yWrP4"}]
    else:
        singers = singer
    entry = {
        "songname": title,
        "singer": singers,
        "albumname": album,
        "songmid": songmid,
    }
    entry.update(kwargs)
    return entry


def make_song_search_payload(*entries):
    """Build a QQ Music keyword-search response."""
    return {"code": 0, "data": {"song": {"list": list(entries), "totalnum": len(entries)}}}


def encode_lyrics(text: str) -> str:
    """Base64-encode lyrics text the way the lyrics endpoint does."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


SAMPLE_LYRICS = (
    "[ti:晴天]\n"
    "[ar:周杰伦]\n"
    "[00:00.00]晴天 - 周杰伦\n"
    "[00:01.00]词：周杰伦\n"
    "[00:02.00]曲：周杰伦\n"
    "[00:29.35]故事的小黄花\n"
    "[00:32.40]从出生那年就飘着\n"
    "[00:35.85]童年的荡秋千\n"
    "[00:39.13]随记忆一直晃到现在\n"
    "[00:42.36]Re So So Si Do Si La\n"
    "[00:45.00]So La Si Si Si Si La Si La So\n"
)

SAMPLE_FRAGMENT = (
    "故事的小黄花\n"
    "从出生那年就飘着\n"
    "童年的荡秋千\n"
    "随记忆一直晃到现在\n"
    "Re So So Si Do Si La"
)
