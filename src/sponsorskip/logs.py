"""Logger setup for the skipper."""

from __future__ import annotations

import logging
import sys

try:  # pragma: no cover - optional dependency
    import rich  # noqa: F401

    _RICH_AVAILABLE = True
except Exception:  # pragma: no cover - optional dependency
    _RICH_AVAILABLE = False

LOGGER_NAME = "sponsorskip"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single ``"stream"`` handler to the package logger.

    With rich installed the handler is a ``RichHandler`` so messages share the
    host terminal cleanly; otherwise a plain ``StreamHandler`` on stderr.
    ``verbose`` lowers the level to DEBUG, which is where every silent
    fallback (lookup failures, non-skippable chapters) is reported.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if _RICH_AVAILABLE:
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    handler.set_name("stream")
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
