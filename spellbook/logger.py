"""Central logging configuration for the spellbook package."""

from __future__ import annotations

import logging
from typing import Optional

_DEFAULT_LEVEL = logging.INFO
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: Optional[str] = None, *, debug: bool = False) -> logging.Logger:
    """Return a module-level logger with default configuration applied.

    Args:
        name: Logger name, usually ``__name__``.
        debug: Lower this logger to DEBUG (used by the pagination trace flag).
    Returns:
        Configured logger.
    """

    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_DEFAULT_LEVEL, format=_FORMAT)
    if debug:
        logger.setLevel(logging.DEBUG)
    return logger
