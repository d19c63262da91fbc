"""Logging configuration for the reindexer."""

import logging
import sys

from reindexer.core.config import Settings, get_settings

# Width of the separator lines written between pipeline stages.
SEPARATOR_WIDTH = 37


def setup_logging(settings: Settings | None = None) -> None:
    """Configure process-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout.
    """
    settings = settings or get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def log_separator(logger: logging.Logger, char: str = "-") -> None:
    """Write a separator line (``char`` repeated) at INFO level."""
    logger.info(char * SEPARATOR_WIDTH)
