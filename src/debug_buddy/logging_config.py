"""Logging setup for debug-buddy."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None, tui: bool = False
) -> logging.Logger:
    """
    Configure the ``debug_buddy`` logger.

    Args:
        level: Level name such as "DEBUG" or "WARNING"
        log_file: Optional file path to append logs to
        tui: Route console output through Textual instead of stderr,
             so log lines don't tear the running UI

    Returns:
        The configured ``debug_buddy`` logger
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    handlers: list[logging.Handler] = []
    if tui:
        from textual.logging import TextualHandler

        handlers.append(TextualHandler())
    else:
        handlers.append(
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_path=numeric <= logging.DEBUG,
            )
        )

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        handlers.append(file_handler)

    logger = logging.getLogger("debug_buddy")
    for old in list(logger.handlers):
        logger.removeHandler(old)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
    return logger
