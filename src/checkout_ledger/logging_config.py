"""Root logger setup for the server process."""

from __future__ import annotations

import logging

from checkout_ledger.config import LoggingSettings

_FORMATS = {
    "simple": "%(levelname)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
}


def configure_logging(settings: LoggingSettings) -> None:
    """Apply the configured level and format to the root logger.

    An unknown level name falls back to ``INFO``.  ``force=True`` replaces
    any handlers installed earlier, so calling this twice is harmless.
    """
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=_FORMATS[settings.format], force=True)
