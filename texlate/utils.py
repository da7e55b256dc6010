"""
Utility functions for texlate.
"""
import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .constants import DEFAULT_LOG_LEVEL


def setup_logging(level: Optional[str] = None, console: Optional[Console] = None) -> None:
    """
    Route texlate's log records through Rich on stderr.

    Args:
        level: Log level name (e.g. 'DEBUG', 'warning')
        console: Console to log to (a stderr console if not provided)
    """
    level_name = (level or DEFAULT_LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("texlate")
    logger.handlers = [handler]
    logger.setLevel(numeric_level)
