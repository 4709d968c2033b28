"""Logging setup for the command line interface.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, by the CLI.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "schema_bridge"


def configure_logging(level: str | int = "WARNING", console: Console | None = None) -> logging.Logger:
    """Install a rich handler on the package logger.

    Calling it again only updates the level.

    Args:
        level: Logging level name or number
        console: Console to log to (defaults to stderr)

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
