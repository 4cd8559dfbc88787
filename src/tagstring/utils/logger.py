"""Minimal logging utilities for tagstring.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from tagstring.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Building styled text")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "tagstring." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'tagstring.mymodule'
    """
    if not (name == "tagstring" or name.startswith("tagstring.")):
        name = f"tagstring.{name}"
    return logging.getLogger(name)
