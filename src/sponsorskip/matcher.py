"""Decide whether a playback position falls inside a skip segment."""

from __future__ import annotations

from typing import Iterable

from .sponsorblock import Segment


def find_segment(position: float, segments: Iterable[Segment]) -> Segment | None:
    """First segment with ``start <= position < end``, in iteration order."""
    for segment in segments:
        if segment.contains(position):
            return segment
    return None


def decide(position: float, segments: Iterable[Segment]) -> float | None:
    """Return the jump target for *position*, or ``None`` if nothing to skip.

    Intervals are half-open, so landing exactly on a segment's end after a
    jump does not match that segment again.
    """
    segment = find_segment(position, segments)
    return segment.end if segment else None
