"""SponsorBlock category table.

Each category has a human-readable label (the text yt-dlp writes after the
``[SponsorBlock]: `` chapter prefix) and the token the SponsorBlock API uses
on the wire.  The table is closed: anything not listed here is ignored.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable


class Category(Enum):
    SPONSOR = ("Sponsor", "sponsor")
    SELF_PROMOTION = ("Self-promotion", "selfpromo")
    INTERACTION_REMINDER = ("Interaction Reminder", "interaction")
    HIGHLIGHT = ("Highlight", "poi_highlight")
    FILLER_DIALOGUE = ("Filler Dialogue", "filler")
    MUSIC_OFF_TOPIC = ("Music Off-Topic", "music_offtopic")
    PREVIEW = ("Preview", "preview")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def token(self) -> str:
        return self.value[1]


ALL_CATEGORIES: frozenset[Category] = frozenset(Category)

_BY_LABEL = {c.label: c for c in Category}
_BY_TOKEN = {c.token: c for c in Category}


def from_label(label: str) -> Category | None:
    """Exact label lookup (``"Self-promotion"`` -> ``SELF_PROMOTION``)."""
    return _BY_LABEL.get(label)


def from_token(token: object) -> Category | None:
    if not isinstance(token, str):
        return None
    return _BY_TOKEN.get(token)


def ordered_tokens(categories: Iterable[Category]) -> list[str]:
    """Wire tokens for *categories* in table order, so request URLs are stable."""
    wanted = set(categories)
    return [c.token for c in Category if c in wanted]


def parse_categories(
    raw: str | Iterable[str], logger: logging.Logger | None = None
) -> frozenset[Category]:
    """Parse a comma list (or iterable) of wire tokens or labels.

    Names are matched against tokens first, then labels.  Unknown names are
    skipped with a warning.

    >>> sorted(c.token for c in parse_categories("sponsor, Preview"))
    ['preview', 'sponsor']
    """
    names = raw.split(",") if isinstance(raw, str) else list(raw)
    found: set[Category] = set()
    for name in names:
        name = name.strip()
        if not name:
            continue
        category = _BY_TOKEN.get(name) or _BY_LABEL.get(name)
        if category is None:
            if logger:
                logger.warning("Ignoring unknown SponsorBlock category: %s", name)
            continue
        found.add(category)
    return frozenset(found)
