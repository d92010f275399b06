"""The slice of a media player the skipper needs.

Method and event names follow mpv's scripting API (``time-pos``,
``chapter-list``, ``file-loaded`` ...), but any player that can provide them
will do.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol


class PlaybackHost(Protocol):
    def time_pos(self) -> float | None:
        """Current playback position in seconds, ``None`` if unknown."""

    def chapter_list(self) -> Any:
        """Native chapter list: a sequence of ``{"title", "time"}`` mappings."""

    def chapter(self) -> int | None:
        """0-based index of the current chapter; negative or ``None`` if none."""

    def metadata(self) -> Mapping[str, object] | None:
        """File metadata tags (``comment`` and friends), ``None`` if unavailable."""

    def path(self) -> str | None:
        """Local path or URL of the loaded item."""

    def seek(self, seconds: float) -> None:
        """Request an absolute position change."""

    def register_event(self, name: str, handler: Callable[..., None]) -> None: ...

    def observe_property(self, name: str, handler: Callable[..., None]) -> None: ...

    def add_periodic_timer(self, interval: float, handler: Callable[[], None]) -> Any: ...
