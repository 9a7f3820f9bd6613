"""Lyrics decoding and excerpt extraction.

The lyrics endpoint returns a base64 blob that decodes to line-tagged text::

    [ti:Title]
    [00:01.20]作词：Someone
    [00:12.85]First lyric line
    [00:15.02]Second lyric line

Everything here is pure; no I/O.
"""

import base64
import binascii

from core.exceptions import LyricsDecodeError

# Full-width colon used by credit lines such as "作词：", "作曲：", "编曲：", "制作人：".
CREDIT_MARKER = "："
# Opening bracket of "【未经著作权人许可不得翻唱翻录或使用】"-style disclaimers.
DISCLAIMER_MARKER = "【"
MAX_FRAGMENT_LINES = 5


def decode_lyrics(raw_base64_lyrics: str) -> str:
    """Decode a base64 lyrics blob into text.

    Raises:
        LyricsDecodeError: If the blob is not valid base64 or not valid UTF-8
    """
    try:
        decoded = base64.b64decode(raw_base64_lyrics, validate=True)
    except (binascii.Error, ValueError) as e:
        raise LyricsDecodeError(f"Failed to decode lyrics: {e}") from e

    try:
        return decoded.decode("utf-8")
    except UnicodeDecodeError as e:
        raise LyricsDecodeError(f"Failed to convert lyrics to UTF-8: {e}") from e


def strip_tag(line: str) -> str:
    """Drop everything up to and including the first ``]`` if a ``[`` precedes it."""
    bracket_start = line.find("[")
    bracket_end = line.find("]")
    if bracket_start != -1 and bracket_end != -1 and bracket_start < bracket_end:
        return line[bracket_end + 1 :]
    return line


def is_excerpt_line(line: str, title: str) -> bool:
    """Whether a tag-stripped line belongs in the excerpt."""
    trimmed = line.strip()
    if not trimmed:
        return False
    return (
        CREDIT_MARKER not in trimmed
        and DISCLAIMER_MARKER not in trimmed
        and title not in trimmed
    )


def format_lyrics(title: str, lyrics: str, max_lines: int = MAX_FRAGMENT_LINES) -> str:
    """First ``max_lines`` lyric lines with tags, credits, disclaimers and title echoes removed."""
    kept: list[str] = []
    for raw_line in lyrics.split("\n"):
        line = raw_line.removesuffix("\r")
        content = strip_tag(line)
        if not is_excerpt_line(content, title):
            continue
        kept.append(content)
        if len(kept) == max_lines:
            break
    return "\n".join(kept)


def decode_and_format_lyrics(title: str, raw_base64_lyrics: str) -> str:
    """Decode a lyrics blob and reduce it to a short excerpt."""
    return format_lyrics(title, decode_lyrics(raw_base64_lyrics))
