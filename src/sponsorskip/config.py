"""Configuration defaults and helpers."""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .categories import ALL_CATEGORIES, Category, parse_categories
from .reference import DEFAULT_METADATA_KEYS
from .sponsorblock import DEFAULT_TIMEOUT, SPONSORBLOCK_API_BASE

USER_CONFIG_PATH = Path("~/.config/sponsorskip/config.ini").expanduser()

_SECTION = "sponsorskip"
_TRUE = {"1", "yes", "true", "on"}
_FALSE = {"0", "no", "false", "off"}


def load_user_config(config_path: Path = USER_CONFIG_PATH) -> dict:
    """Read ~/.config/sponsorskip/config.ini and return overrides as a dict.

    Only keys that are explicitly set in the file are returned — missing keys
    are omitted so callers can distinguish "not set" from "set to default".
    The file is only ever read.

    Supported keys (all in [sponsorskip] section):
        categories       = sponsor,selfpromo,interaction
        api_base_url     = https://sponsor.ajay.app/api/skipSegments
        request_timeout  = 10
        tick_interval    = 1.0
        metadata_keys    = comment,Comment
        read_file_tags   = yes
        verbose          = no
    """
    if not config_path.exists():
        return {}
    parser = configparser.ConfigParser()
    parser.read(config_path, encoding="utf-8")
    if not parser.has_section(_SECTION):
        return {}
    return dict(parser[_SECTION])


@dataclass(frozen=True)
class Config:
    api_base_url: str = SPONSORBLOCK_API_BASE
    request_timeout: float = DEFAULT_TIMEOUT
    # Categories to skip.  Empty = never query SponsorBlock and never skip
    # marked chapters.
    categories: frozenset[Category] = field(default_factory=lambda: ALL_CATEGORIES)
    metadata_keys: tuple[str, ...] = DEFAULT_METADATA_KEYS
    tick_interval: float = 1.0
    read_file_tags: bool = True
    verbose: bool = False

    def with_overrides(
        self,
        *,
        api_base_url: str | None = None,
        request_timeout: float | None = None,
        categories: frozenset[Category] | None = None,
        metadata_keys: tuple[str, ...] | None = None,
        tick_interval: float | None = None,
        read_file_tags: bool | None = None,
        verbose: bool | None = None,
    ) -> "Config":
        return Config(
            api_base_url=api_base_url or self.api_base_url,
            request_timeout=request_timeout
            if request_timeout is not None
            else self.request_timeout,
            categories=frozenset(categories)
            if categories is not None
            else self.categories,
            metadata_keys=tuple(metadata_keys)
            if metadata_keys
            else self.metadata_keys,
            tick_interval=tick_interval
            if tick_interval is not None
            else self.tick_interval,
            read_file_tags=read_file_tags
            if read_file_tags is not None
            else self.read_file_tags,
            verbose=verbose if verbose is not None else self.verbose,
        )


def config_from_user_file(
    config_path: Path = USER_CONFIG_PATH,
    base: Config | None = None,
    logger: logging.Logger | None = None,
) -> Config:
    """Apply the keys set in *config_path* on top of *base* (or the defaults).

    Values that fail to parse are ignored with a warning.
    """
    config = base or Config()
    raw = load_user_config(config_path)
    if not raw:
        return config

    categories = None
    if "categories" in raw:
        categories = parse_categories(raw["categories"], logger)
        if logger and not categories:
            logger.info("No SponsorBlock categories enabled — skipping disabled.")

    metadata_keys = None
    if raw.get("metadata_keys"):
        metadata_keys = tuple(
            k.strip() for k in raw["metadata_keys"].split(",") if k.strip()
        )

    return config.with_overrides(
        api_base_url=raw.get("api_base_url") or None,
        request_timeout=_float_option(raw, "request_timeout", logger),
        categories=categories,
        metadata_keys=metadata_keys,
        tick_interval=_float_option(raw, "tick_interval", logger),
        read_file_tags=_bool_option(raw, "read_file_tags", logger),
        verbose=_bool_option(raw, "verbose", logger),
    )


def _float_option(
    raw: dict, key: str, logger: logging.Logger | None
) -> float | None:
    if key not in raw:
        return None
    try:
        value = float(raw[key])
    except ValueError:
        value = 0.0
    if value <= 0:
        if logger:
            logger.warning("Ignoring invalid %s in config: %r", key, raw[key])
        return None
    return value


def _bool_option(raw: dict, key: str, logger: logging.Logger | None) -> bool | None:
    if key not in raw:
        return None
    value = raw[key].strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    if logger:
        logger.warning("Ignoring invalid %s in config: %r", key, raw[key])
    return None
