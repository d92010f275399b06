"""Skip orchestration for one player.

The controller owns everything that is scoped to the current media item: the
resolution state, the SponsorBlock segments once they arrive, and the
in-flight lookup.  All of it is dropped on the next file load.

Events arrive one at a time from the host.  The lookup runs on the client's
worker thread, but its result is only folded in here, from whichever event
comes next (the periodic tick guarantees one at least every second), so no
locking is needed.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from enum import Enum
from pathlib import Path
from typing import Any

from .chapters import chapters_from_native, skippable_interval_at
from .config import Config
from .host import PlaybackHost
from .matcher import find_segment
from .reference import extract_url_from_text, id_from_url, reference_from_metadata
from .sponsorblock import Segment, SegmentClient
from .tags import read_comment_tags
from .utils import safe_float


class ControllerState(Enum):
    IDLE = "idle"
    AWAITING_REMOTE = "awaiting-remote"
    REMOTE_RESOLVED = "remote-resolved"
    CHAPTER_FALLBACK = "chapter-fallback"


# States in which the embedded chapter list is the skip source.
_CHAPTER_STATES = (ControllerState.AWAITING_REMOTE, ControllerState.CHAPTER_FALLBACK)


class SkipController:
    def __init__(
        self,
        host: PlaybackHost,
        config: Config | None = None,
        *,
        client: SegmentClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.host = host
        self.config = config or Config()
        self._logger = logger
        self._owns_client = client is None
        self._client = client or SegmentClient(
            self.config.categories,
            base_url=self.config.api_base_url,
            timeout=self.config.request_timeout,
            logger=logger,
        )
        self.state = ControllerState.IDLE
        self._generation = 0
        self._pending: tuple[int, Future] | None = None
        self._segments: tuple[Segment, ...] | None = None
        # Segment already jumped out of; the host may still report positions
        # inside it until the seek lands.
        self._skipped: Segment | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def segments(self) -> tuple[Segment, ...] | None:
        """Remote segments for the current item, or ``None`` if not resolved."""
        return self._segments

    # ------------------------------------------------------------------
    # Host events
    # ------------------------------------------------------------------

    def on_file_loaded(self, *_args: Any) -> None:
        self._reset()
        self.state = ControllerState.AWAITING_REMOTE

        video_id = self._resolve_reference()
        if video_id is None:
            self.state = ControllerState.CHAPTER_FALLBACK
        else:
            self._debug("SponsorBlock: looking up video %s", video_id)
            self._pending = (self._generation, self._client.submit(video_id))
            self._collect()
        self._check_chapters()

    def on_file_unloaded(self, *_args: Any) -> None:
        self._reset()
        self.state = ControllerState.IDLE

    def on_chapter_changed(self, *_args: Any) -> None:
        self._collect()
        self._check_chapters()

    def on_seek(self, *_args: Any) -> None:
        self._collect()
        self._check_chapters()

    def on_position_changed(self, *_args: Any) -> None:
        self._collect()
        self._check_remote()

    def on_tick(self) -> None:
        self._collect()
        self._check_remote()

    def close(self) -> None:
        self._reset()
        if self._owns_client:
            self._client.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        # An in-flight lookup is left to finish; its result belongs to the
        # previous generation and is never applied.
        self._generation += 1
        self._pending = None
        self._segments = None
        self._skipped = None

    def _resolve_reference(self) -> str | None:
        if not self.config.categories:
            self._debug("SponsorBlock: no categories enabled")
            return None

        video_id = reference_from_metadata(
            self.host.metadata(), self.config.metadata_keys
        )
        if video_id:
            return video_id

        path = self.host.path()
        if not path:
            self._debug("SponsorBlock: no video reference in metadata")
            return None
        # Streams opened straight from a YouTube URL.
        video_id = id_from_url(extract_url_from_text(path))
        if video_id:
            return video_id
        if self.config.read_file_tags and "://" not in path:
            # Already in priority order, purl before comments.
            tags = read_comment_tags(Path(path), self._logger)
            video_id = reference_from_metadata(tags, list(tags))
            if video_id:
                return video_id
        self._debug("SponsorBlock: no video reference found for %s", path)
        return None

    def _collect(self) -> None:
        """Apply the lookup result if it has finished."""
        if self._pending is None:
            return
        generation, future = self._pending
        if generation != self._generation:
            self._pending = None
            return
        if not future.done():
            return
        self._pending = None

        result = None
        if not future.cancelled():
            exc = future.exception()
            if exc is not None:
                self._debug("SponsorBlock: lookup raised %r", exc)
            else:
                result = future.result()

        if result:
            self._segments = tuple(result)
            self.state = ControllerState.REMOTE_RESOLVED
            self._info(
                "SponsorBlock: loaded %d segment(s) from the API", len(self._segments)
            )
        else:
            self.state = ControllerState.CHAPTER_FALLBACK
            self._debug("SponsorBlock: no remote segments, using chapters")

    def _check_remote(self) -> None:
        if self.state is not ControllerState.REMOTE_RESOLVED or not self._segments:
            return
        position = safe_float(self.host.time_pos())
        if position is None:
            return
        segment = find_segment(position, self._segments)
        if segment is None:
            self._skipped = None
            return
        if segment == self._skipped:
            return
        self._info("SponsorBlock: Skipping '%s' segment.", segment.category.label)
        if self._seek(segment.end):
            self._skipped = segment

    def _check_chapters(self) -> None:
        if self.state not in _CHAPTER_STATES:
            return
        chapters = chapters_from_native(self.host.chapter_list())
        if not chapters:
            self._debug("No chapters found.")
            return
        index = self.host.chapter()
        if not isinstance(index, int) or isinstance(index, bool):
            index = None
        hit = skippable_interval_at(
            chapters, index, self.config.categories, self._logger
        )
        if hit is None:
            return
        category, target = hit
        self._info("SponsorBlock: Skipping '%s' segment.", category.label)
        self._seek(target)

    def _seek(self, target: float) -> bool:
        try:
            self.host.seek(target)
        except Exception as exc:  # noqa: BLE001 - host boundary
            if self._logger:
                self._logger.warning(
                    "SponsorBlock: seek to %.2f failed: %s", target, exc
                )
            return False
        self._info("SponsorBlock: Skipped to %.2f seconds.", target)
        return True

    def _info(self, message: str, *args: object) -> None:
        if self._logger:
            self._logger.info(message, *args)

    def _debug(self, message: str, *args: object) -> None:
        if self._logger:
            self._logger.debug(message, *args)
