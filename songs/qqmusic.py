"""QQ Music client: keyword search and lyrics lookup.

The endpoints only answer requests that look like they come from the QQ Music
web player, hence the fixed browser header set below. Keep it here so it can be
updated without touching the resolver.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.exceptions import MalformedResponseError, UpstreamRequestError
from core.sentry import add_upstream_breadcrumb

logger = logging.getLogger(__name__)

QQ_MUSIC_SEARCH_URL = "https://c.y.qq.com/soso/fcgi-bin/client_search_cp"
QQ_MUSIC_LYRICS_URL = "https://c.y.qq.com/lyric/fcgi-bin/fcg_query_lyric_new.fcg"

QQ_MUSIC_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36"
    ),
    "Referer": "https://c.y.qq.com/",
    "Host": "c.y.qq.com",
}

SEARCH_PARAMS = {
    "format": "json",
    "inCharset": "utf8",
    "outCharset": "utf-8",
    "ct": "24",
    "qqmusic_ver": "1298",
    "remoteplace": "txt.yqq.song",
    "t": "0",
    "aggr": "1",
    "cr": "1",
    "lossless": "0",
    "flag_qc": "0",
    "platform": "yqq.json",
    "g_tk": "1124214810",
    "loginUin": "0",
    "hostUin": "0",
    "notice": "0",
    "needNewCode": "0",
}

LYRICS_PARAMS = {
    "format": "json",
    "outCharset": "utf-8",
}


class QQMusicClient:
    """Async client for the QQ Music search and lyrics endpoints."""

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=QQ_MUSIC_HEADERS,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, url: str, params: dict, operation: str) -> Any:
        client = await self._get_client()
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamRequestError(f"Failed to send {operation} request: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Failed to parse {operation} response: {e}") from e

    async def search_songs(self, title: str) -> list[dict]:
        """Keyword search by title.

        Returns:
            The raw ``data.song.list`` entries in upstream order

        Raises:
            UpstreamRequestError: On transport failure or non-2xx status
            MalformedResponseError: If the body is not JSON or has no song list
        """
        add_upstream_breadcrumb("qqmusic", "search_songs", {"title": title})
        logger.info(f"Searching QQ Music for '{title}'")

        data = await self._get_json(QQ_MUSIC_SEARCH_URL, {**SEARCH_PARAMS, "w": title}, "search")

        try:
            songs = data["data"]["song"]["list"]
        except (KeyError, TypeError):
            songs = None
        if not isinstance(songs, list):
            raise MalformedResponseError("malformed search response")

        logger.debug(f"QQ Music returned {len(songs)} songs for '{title}'")
        return songs

    async def fetch_lyrics(self, song_mid: str) -> str:
        """Fetch the raw base64 lyrics blob for a song.

        Raises:
            UpstreamRequestError: On transport failure or non-2xx status
            MalformedResponseError: If the body is not JSON or has no ``lyric`` string
        """
        add_upstream_breadcrumb("qqmusic", "fetch_lyrics", {"songmid": song_mid})

        data = await self._get_json(
            QQ_MUSIC_LYRICS_URL, {**LYRICS_PARAMS, "songmid": song_mid}, "lyrics"
        )

        lyric = data.get("lyric") if isinstance(data, dict) else None
        if not isinstance(lyric, str):
            raise MalformedResponseError(
                "Failed to parse lyrics", details={"songmid": song_mid}
            )
        return lyric

    async def check_api(self) -> bool:
        """Check QQ Music connectivity with a cheap lyrics lookup."""
        try:
            client = await self._get_client()
            resp = await client.get(QQ_MUSIC_LYRICS_URL, params=LYRICS_PARAMS)
            return bool(resp.status_code == 200)
        except Exception:
            return False
