"""Pull a YouTube video ID out of free-text file metadata.

yt-dlp's ``--embed-metadata`` stores the source URL in the ``comment`` tag,
so a downloaded file usually carries enough to look it up on SponsorBlock.
Everything here is a pure function over strings and returns ``None`` on a miss.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from .utils import first_match

DEFAULT_METADATA_KEYS = ("comment", "Comment")

_URL_RE = re.compile(
    r"https?://(?:[\w-]+\.)*(?:youtu\.be|youtube(?:-nocookie)?\.com)"
    r"(?:/[^\s\"'<>]*)?",
    re.IGNORECASE,
)

# Tried in order; the first capture wins.
_ID_PATTERNS = (
    re.compile(r"[?&]v=([\w-]+)"),
    re.compile(r"youtu\.be/([\w-]+)", re.IGNORECASE),
    re.compile(r"/shorts/([\w-]+)"),
)


def extract_url_from_text(text: str | None) -> str | None:
    """Return the first YouTube-looking URL in *text*.

    >>> extract_url_from_text("see https://youtu.be/abc123 thanks")
    'https://youtu.be/abc123'
    >>> extract_url_from_text("")
    """
    if not text:
        return None
    match = _URL_RE.search(text)
    return match.group(0) if match else None


def id_from_url(url: str | None) -> str | None:
    """Return the video ID from a watch, short-link or shorts URL.

    >>> id_from_url("https://www.youtube.com/watch?v=xyz789&t=5")
    'xyz789'
    >>> id_from_url("https://www.youtube.com/shorts/qr5678")
    'qr5678'
    >>> id_from_url("https://www.youtube.com/playlist?list=PLabc")
    """
    if not url:
        return None
    return first_match(_ID_PATTERNS, url)


def reference_from_metadata(
    metadata: Mapping[str, object] | None,
    keys: Iterable[str] = DEFAULT_METADATA_KEYS,
) -> str | None:
    if not metadata:
        return None
    for key in keys:
        value = metadata.get(key)
        if not isinstance(value, str):
            continue
        video_id = id_from_url(extract_url_from_text(value))
        if video_id:
            return video_id
    return None
