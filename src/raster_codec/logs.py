"""
Logging setup for scripts and examples.

Library modules only create named loggers under ``raster_codec``; nothing is
printed unless an application configures handlers, for instance with
configure_logging().
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "raster_codec"


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """
    Attach a RichHandler to the package logger.

    Calling it again replaces the previous handler instead of adding another.

    Args:
        verbose: Log at DEBUG instead of INFO
        console: Console to render to (a new stderr console by default)

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=console or Console(stderr=True), rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
