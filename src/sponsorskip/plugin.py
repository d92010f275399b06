"""Wire a :class:`SkipController` into a player."""

from __future__ import annotations

import logging

from .config import Config, config_from_user_file
from .controller import SkipController
from .host import PlaybackHost
from .logs import configure_logging
from .sponsorblock import SegmentClient


def attach(
    host: PlaybackHost,
    config: Config | None = None,
    *,
    client: SegmentClient | None = None,
    logger: logging.Logger | None = None,
) -> SkipController:
    """Create a controller and subscribe it to *host*'s events.

    Without an explicit *config* the user's config.ini is applied over the
    defaults.  Without a *logger* the package logger is configured.
    """
    if config is None:
        config = config_from_user_file()
    if logger is None:
        logger = configure_logging(config.verbose)

    controller = SkipController(host, config, client=client, logger=logger)
    host.register_event("file-loaded", controller.on_file_loaded)
    host.register_event("end-file", controller.on_file_unloaded)
    host.register_event("seek", controller.on_seek)
    host.observe_property("chapter", controller.on_chapter_changed)
    host.observe_property("time-pos", controller.on_position_changed)
    host.add_periodic_timer(config.tick_interval, controller.on_tick)

    logger.info("sponsorskip loaded (%d categories)", len(config.categories))
    return controller
