"""Logging for trafficflow.

Every module logs through a child of the ``trafficflow`` logger. One stream
handler is attached to that logger the first time a module asks for a logger;
the CLI's ``--verbose`` / ``--quiet`` flags only move the package level.
Log lines go to stderr so ``--json`` output on stdout stays parseable.
"""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "trafficflow"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    fmt: str = LOG_FORMAT,
) -> logging.Handler:
    """Attach the package handler, replacing one installed earlier.

    Args:
        level: Level for the ``trafficflow`` logger.
        stream: Destination stream; ``sys.stderr`` when omitted.
        fmt: Record format.

    Returns:
        The installed handler.
    """
    global _handler

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter(fmt))
    package_logger.addHandler(_handler)
    package_logger.setLevel(level)
    return _handler


def get_logger(name: str) -> logging.Logger:
    """Logger for a trafficflow module, e.g. ``get_logger(__name__)``."""
    if _handler is None:
        configure_logging()
    return logging.getLogger(name)


def set_global_log_level(level: int) -> None:
    """Move every trafficflow logger to ``level``."""
    if _handler is None:
        configure_logging(level)
    else:
        logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def reset_logging() -> None:
    """Detach the package handler and clear the level (test helper)."""
    global _handler

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)
        _handler = None
    package_logger.setLevel(logging.NOTSET)
