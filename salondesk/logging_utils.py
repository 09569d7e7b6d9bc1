"""Mini README: Application-wide logging helpers for SalonDesk.

Structure:
    * level_for_environment - maps ``SalonDeskSettings.environment`` to a level.
    * configure_root_logger - one-shot setup of the root handler; later calls
      only adjust the level.
    * get_logger - factory returning module loggers with baseline configuration.

Usage:
    Modules call ``get_logger(__name__)`` once and keep the result in a
    module-level ``LOGGER``. The CLI passes the configured environment's level
    when it starts the service, so register recomputations show up at DEBUG
    during development while production stays at INFO.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False

_ENVIRONMENT_LEVELS = {
    "development": logging.DEBUG,
    "test": logging.WARNING,
    "production": logging.INFO,
}


def level_for_environment(environment: str) -> int:
    """Return the log level for an environment label; unknown labels use INFO."""

    return _ENVIRONMENT_LEVELS.get(environment.strip().lower(), logging.INFO)


def configure_root_logger(level: int = logging.INFO) -> None:
    """Attach a single stream handler to the root logger and set its level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a named logger, configuring the root logger on first use."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
