"""Read the source-URL tags straight from a local media file.

Some players expose no metadata map (or drop the comment tag), but the file
written by ``yt-dlp --embed-metadata`` still carries it.  Used only as a
fallback when the host's metadata yields no video ID.
"""

from __future__ import annotations

import logging
from pathlib import Path

# Keys compared case-insensitively, most trustworthy first.  ``purl`` only
# ever holds the source URL; comments usually do.  ID3 keeps comments in COMM
# frames and MP4 in the ``©cmt`` atom; Vorbis comments use plain names.
# Descriptions are not read: they routinely link to other videos.
_COMMENT_KEYS = ("purl", "comment", "\xa9cmt")


def read_comment_tags(
    file_path: Path, logger: logging.Logger | None = None
) -> dict[str, str]:
    """Return ``{tag_name: text}`` for comment-like tags in *file_path*.

    The dict is ordered by how reliably the tag names the file's own source:
    ``purl`` first, then comments.

    Returns an empty dict if mutagen is unavailable, the file is missing, or
    its tags cannot be read.
    """
    try:
        from mutagen import File as MutagenFile  # type: ignore
    except ImportError:
        if logger:
            logger.warning(
                "mutagen not installed; cannot read tags from %s", file_path.name
            )
        return {}

    if not file_path.is_file():
        return {}

    try:
        audio = MutagenFile(file_path, easy=False)
    except Exception as exc:  # noqa: BLE001 - mutagen raises many types
        if logger:
            logger.debug("mutagen could not read %s: %s", file_path.name, exc)
        return {}
    if audio is None or audio.tags is None:
        return {}

    ranked: list[tuple[int, str, str]] = []
    for key, value in audio.tags.items():
        name = str(key)
        # ID3 frame keys look like "COMM::eng" or "COMM:desc:eng".
        base = name.split(":", 1)[0].lower()
        if base == "comm":
            base = "comment"
        if base not in _COMMENT_KEYS:
            continue
        text = _tag_text(value)
        if text:
            ranked.append((_COMMENT_KEYS.index(base), name, text))
    # Stable sort keeps the file's own order within one rank.
    ranked.sort(key=lambda entry: entry[0])
    found = {name: text for _, name, text in ranked}
    if logger and found:
        logger.debug("Read %d comment tag(s) from %s", len(found), file_path.name)
    return found


def _tag_text(value: object) -> str:
    # ID3 frames carry their text in ``.text``; Vorbis/MP4 give lists.
    value = getattr(value, "text", value)
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    if value is None:
        return ""
    return str(value)
