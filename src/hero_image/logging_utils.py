"""Logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
PACKAGE_LOGGER = "hero_image"
NOISY_LOGGERS = ("urllib3",)


def configure_logging(verbose: bool = False) -> None:
    """Configure application logging once for CLI usage.

    Retry chatter from urllib3 is kept at WARNING unless ``verbose`` is set,
    since every HEAD probe on a flaky host would otherwise log a line.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if verbose else logging.WARNING)


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the package logger, or a child logger for one component."""
    if component:
        return logging.getLogger(f"{PACKAGE_LOGGER}.{component}")
    return logging.getLogger(PACKAGE_LOGGER)
