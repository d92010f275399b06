"""SponsorBlock API lookups.

1. ``request_segments`` — performs the HTTP GET and decodes the JSON body,
   raising :class:`SegmentLookupError` subclasses on failure.
2. ``parse_segments`` — validates each entry of the decoded payload,
   dropping bad ones individually.
3. ``fetch_segments`` — the silent wrapper used during playback: any failure
   becomes ``None`` so the caller can fall back to embedded chapters.
4. ``SegmentClient`` — runs ``fetch_segments`` on a worker thread so the
   player's event handling never waits on the network.

Only the stdlib (``urllib``, ``json``, ``concurrent.futures``) is used.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Iterable

from .categories import Category, from_token, ordered_tokens
from .utils import safe_float

# ---------------------------------------------------------------------------
# Public constants
# ---------------------------------------------------------------------------

#: The base URL of the SponsorBlock API.
SPONSORBLOCK_API_BASE = "https://sponsor.ajay.app/api/skipSegments"

DEFAULT_TIMEOUT = 10

# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Segment:
    """A half-open skip interval ``[start, end)`` in seconds."""

    category: Category
    start: float
    end: float

    def contains(self, position: float) -> bool:
        return self.start <= position < self.end


class SegmentLookupError(RuntimeError):
    pass


class TransportError(SegmentLookupError):
    """Network failure or non-2xx status from the lookup service."""


class MalformedResponseError(SegmentLookupError):
    """Empty body, invalid JSON, or a payload that is not a list."""


# ---------------------------------------------------------------------------
# SponsorBlock API
# ---------------------------------------------------------------------------


def build_request_url(
    video_id: str,
    categories: Iterable[Category],
    base_url: str = SPONSORBLOCK_API_BASE,
) -> str:
    """Build the lookup URL with one ``category=`` parameter per token.

    >>> build_request_url("abc", [Category.PREVIEW, Category.SPONSOR])
    'https://sponsor.ajay.app/api/skipSegments?videoID=abc&category=sponsor&category=preview'
    """
    params = urllib.parse.urlencode(
        {"videoID": video_id, "category": ordered_tokens(categories)},
        doseq=True,
    )
    return f"{base_url}?{params}"


def request_segments(
    video_id: str,
    categories: Iterable[Category],
    *,
    base_url: str = SPONSORBLOCK_API_BASE,
    timeout: float = DEFAULT_TIMEOUT,
    logger: logging.Logger | None = None,
) -> list[Any]:
    """Query the API and return the decoded JSON array.

    Raises
    ------
    TransportError
        Connection errors, timeouts and any HTTP error status.  SponsorBlock
        answers 404 when a video has no segments; that is reported here too.
    MalformedResponseError
        Empty body, undecodable JSON, or a top-level value that is not a list.
    """
    url = build_request_url(video_id, categories, base_url)
    if logger:
        logger.debug("SponsorBlock API request: %s", url)

    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:
            status = getattr(resp, "status", None)
            body = resp.read()
    except urllib.error.HTTPError as exc:
        raise TransportError(f"HTTP {exc.code} for video {video_id}") from exc
    except (urllib.error.URLError, OSError) as exc:
        # URLError is an OSError subclass; socket timeouts land here as well.
        raise TransportError(f"request failed for video {video_id}: {exc}") from exc

    if isinstance(status, int) and not 200 <= status < 300:
        raise TransportError(f"HTTP {status} for video {video_id}")
    if not body or not body.strip():
        raise MalformedResponseError(f"empty response for video {video_id}")
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise MalformedResponseError(f"invalid JSON for video {video_id}") from exc
    if not isinstance(data, list):
        raise MalformedResponseError(
            f"expected a JSON array for video {video_id}, got {type(data).__name__}"
        )
    return data


def parse_segments(
    data: Iterable[Any], logger: logging.Logger | None = None
) -> list[Segment]:
    """Turn decoded API entries into validated segments, sorted by start."""
    segments: list[Segment] = []
    for item in data:
        segment = _parse_entry(item)
        if segment is None:
            if logger:
                logger.debug("SponsorBlock: dropping malformed entry %r", item)
            continue
        segments.append(segment)
    segments.sort(key=lambda s: s.start)
    return segments


def _parse_entry(item: Any) -> Segment | None:
    if not isinstance(item, dict):
        return None
    category = from_token(item.get("category"))
    if category is None:
        return None
    seg = item.get("segment")
    if not isinstance(seg, (list, tuple)) or len(seg) != 2:
        return None
    start = safe_float(seg[0])
    end = safe_float(seg[1])
    if start is None or end is None:
        return None
    if start < 0 or end <= start:
        return None
    return Segment(category=category, start=start, end=end)


def fetch_segments(
    video_id: str,
    categories: Iterable[Category],
    *,
    base_url: str = SPONSORBLOCK_API_BASE,
    timeout: float = DEFAULT_TIMEOUT,
    logger: logging.Logger | None = None,
) -> tuple[Segment, ...] | None:
    """Return the validated skip segments for *video_id*, or ``None``.

    ``None`` covers every unsuccessful outcome: no categories enabled (no
    request is made), transport failure, malformed payload, or a payload in
    which no entry survives validation.  Remote data is a best-effort
    enhancement, so nothing here raises.
    """
    categories = frozenset(categories)
    if not categories:
        if logger:
            logger.debug("SponsorBlock: no categories enabled, skipping lookup")
        return None

    try:
        data = request_segments(
            video_id, categories, base_url=base_url, timeout=timeout, logger=logger
        )
    except SegmentLookupError as exc:
        if logger:
            logger.debug("SponsorBlock: lookup failed: %s", exc)
        return None

    segments = parse_segments(data, logger)
    if not segments:
        if logger:
            logger.debug("SponsorBlock: no usable segments for video %s", video_id)
        return None
    if logger:
        logger.debug(
            "SponsorBlock: found %d segment(s) for video %s: %s",
            len(segments),
            video_id,
            [(f"{s.start:.2f}", f"{s.end:.2f}", s.category.token) for s in segments],
        )
    return tuple(segments)


# ---------------------------------------------------------------------------
# Out-of-band client
# ---------------------------------------------------------------------------


class SegmentClient:
    """Runs lookups on a single worker thread.

    ``submit`` returns immediately with a :class:`~concurrent.futures.Future`;
    the caller polls it from its own event thread, so the result is never
    applied concurrently with event handling.
    """

    def __init__(
        self,
        categories: Iterable[Category],
        *,
        base_url: str = SPONSORBLOCK_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        logger: logging.Logger | None = None,
    ) -> None:
        self.categories = frozenset(categories)
        self.base_url = base_url
        self.timeout = timeout
        self._logger = logger
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="sponsorskip-fetch"
        )

    def submit(self, video_id: str) -> Future:
        return self._executor.submit(
            fetch_segments,
            video_id,
            self.categories,
            base_url=self.base_url,
            timeout=self.timeout,
            logger=self._logger,
        )

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "SegmentClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
