"""Logging setup for the inventory.

Modules log through ``logging.getLogger(__name__)``; the CLI installs a single
Rich handler on the package logger when it starts.
"""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "mathlab"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
