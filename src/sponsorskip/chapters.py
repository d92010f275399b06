"""Skip intervals encoded as embedded chapters.

``yt-dlp --sponsorblock-mark all`` writes one chapter per segment, titled
``[SponsorBlock]: <label>``.  A chapter has no end of its own: it ends where
the next chapter starts, so the last chapter can never be skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from .categories import Category, from_label
from .utils import safe_float

SPONSORBLOCK_CHAPTER_PREFIX = "[SponsorBlock]: "


@dataclass(frozen=True)
class ChapterEntry:
    title: str
    # None when the host gave no usable start time.
    time: float | None


def chapters_from_native(value: Any) -> tuple[ChapterEntry, ...]:
    """Convert the host's native chapter list (``[{"title", "time"}, ...]``).

    Exactly one entry per host item, so the host's chapter index still
    points at the same chapter.  A missing title becomes ``""`` and a
    non-numeric ``time`` becomes ``None``.  Anything that is not a list
    yields an empty tuple.
    """
    if not isinstance(value, (list, tuple)):
        return ()
    chapters: list[ChapterEntry] = []
    for item in value:
        if isinstance(item, ChapterEntry):
            chapters.append(item)
            continue
        if not isinstance(item, dict):
            chapters.append(ChapterEntry(title="", time=None))
            continue
        title = item.get("title")
        if not isinstance(title, str):
            title = ""
        time = safe_float(item.get("time"))
        chapters.append(ChapterEntry(title=title, time=time))
    return tuple(chapters)


def decode_chapter_title(title: str) -> str | None:
    """Return the raw category label from a marked chapter title.

    >>> decode_chapter_title("[SponsorBlock]: Sponsor")
    'Sponsor'
    >>> decode_chapter_title("Intro")
    """
    if not title.startswith(SPONSORBLOCK_CHAPTER_PREFIX):
        return None
    return title[len(SPONSORBLOCK_CHAPTER_PREFIX):]


def skippable_interval_at(
    chapters: Sequence[ChapterEntry],
    index: int | None,
    enabled: Iterable[Category],
    logger: logging.Logger | None = None,
) -> tuple[Category, float] | None:
    """Return ``(category, jump_target)`` if chapter *index* should be skipped.

    The jump target is the start of the following chapter.
    """
    if index is None or index < 0 or index >= len(chapters):
        if logger:
            logger.debug("Not currently in a valid chapter (index %s)", index)
        return None

    label = decode_chapter_title(chapters[index].title)
    if label is None:
        return None

    category = from_label(label)
    if category is None or category not in enabled:
        if logger:
            logger.debug("Not skipping category '%s' (not in skip list)", label)
        return None

    if index + 1 >= len(chapters):
        if logger:
            logger.debug("Cannot skip '%s': it is the last chapter", label)
        return None
    target = chapters[index + 1].time
    if target is None:
        if logger:
            logger.debug("Cannot skip '%s': next chapter has no start time", label)
        return None
    return category, target
