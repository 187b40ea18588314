"""
Logging setup for the chcc command line.
"""

import logging
from typing import Optional

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def configure_logging(level_str: str, fmt: Optional[str] = None) -> None:
    """
    Configure root logging from a level name. Safe to call more than once.

    Args:
        level_str: One of "DEBUG", "INFO", "WARNING", "ERROR"; anything else means WARNING
        fmt: Optional logging format override
    """
    level = LEVEL_MAP.get((level_str or "WARNING").upper(), logging.WARNING)

    # Drop existing handlers so repeated calls take effect.
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    logging.basicConfig(level=level, format=fmt or "%(levelname)s %(name)s: %(message)s")
    logging.getLogger(__name__).debug("Logging configured to %s", logging.getLevelName(level))
