"""Small parsing helpers."""

from __future__ import annotations

import math
import re
from typing import Iterable


def safe_float(value: object, default: float | None = None) -> float | None:
    """Coerce *value* to a finite float, or return *default*.

    Booleans are rejected even though ``float(True)`` works.
    """
    if isinstance(value, bool):
        return default
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result


def first_match(patterns: Iterable[re.Pattern[str]], text: str) -> str | None:
    """Return group 1 of the first pattern that matches *text*."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None
