"""
Centralized logging utilities for the merger.

Defines a shared logger instance and setup function so the core, the
batch runner and the CLI all report through one configured handler.
"""

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logger(
        name: str = __name__,
        level: int = logging.INFO,
        formatter: logging.Formatter | None = None,
        handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Return the named logger, attaching one stream handler on first use.

    Args:
        name: Logger name, typically set to __name__.
        level: Logging level (e.g., logging.INFO, logging.DEBUG).
        formatter: Optional custom formatter.
        handler: Optional custom handler; defaults to stderr.

    Returns:
        A configured logger instance.

    """
    named = logging.getLogger(name)
    named.setLevel(level)
    if named.handlers:
        return named
    target = handler or logging.StreamHandler()
    target.setFormatter(formatter or logging.Formatter(LOG_FORMAT))
    named.addHandler(target)
    named.propagate = False
    return named


def set_verbosity(*, verbose: bool) -> None:
    """Switch the shared logger between INFO and DEBUG output."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


# Shared logger used across modules
logger = setup_logger("art_split_merger")
