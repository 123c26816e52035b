"""Minimal logging utilities for Plantilla.

Provides a simple get_logger function that wraps the standard library logging.
The library only emits debug-level records and never configures handlers.

Example:
    >>> from plantilla.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing template")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "plantilla." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'plantilla.mymodule'
    """
    if not (name == "plantilla" or name.startswith("plantilla.")):
        name = f"plantilla.{name}"
    return logging.getLogger(name)
