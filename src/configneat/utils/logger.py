"""Minimal logging utilities for ConfigNeat.

Provides a simple get_logger function that wraps the standard library logging.
The package never installs handlers; configure them in the host application.

Example:
    >>> from configneat.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Re-lexing lines %d-%d", 3, 7)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "configneat." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'configneat.mymodule'
    """
    if not (name == "configneat" or name.startswith("configneat.")):
        name = f"configneat.{name}"
    return logging.getLogger(name)
