"""Logging setup for the pricecheck service.

All ``pricecheck.*`` loggers route through a single stderr handler attached
to the package logger, so module loggers only need
``logging.getLogger(__name__)``.
"""
import logging
import sys
from typing import Optional

from .config import Settings

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_HANDLER_NAME = "pricecheck.stderr"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Initialise the root ``pricecheck`` logger and return it."""
    root_logger = logging.getLogger("pricecheck")
    root_logger.setLevel(level or Settings.LOG_LEVEL)

    # Prevent duplicate handlers on repeated calls (e.g. tests)
    if any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        return root_logger

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    root_logger.addHandler(handler)
    root_logger.propagate = False

    root_logger.debug("Logging initialised at level %s", root_logger.level)
    return root_logger
