"""Logging set-up for the word search package.

Modules log through ``get_logger(__name__)``, which keeps every record under
the ``wordsearch`` logger. Nothing is printed until an application calls
:func:`configure_logging`; the package itself only installs a ``NullHandler``.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO

ROOT_LOGGER_NAME = __name__.split(".")[0]
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """Send package records to ``stream`` (stderr by default) at ``level``.

    Placement retries and skipped words are reported here rather than raised,
    so the CLI calls this before building a :class:`GameController`. Calling
    it again replaces the previous handler instead of stacking another one.
    """

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``name``'s logger, or the package logger when no name is given."""

    return logging.getLogger(name or ROOT_LOGGER_NAME)
