"""Minimal logging utilities for cqcode.

Example:
    >>> from cqcode.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Abandoned tag at offset %d", 12)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger under the "cqcode." namespace. No
    handlers are attached; applications configure logging themselves.

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'cqcode.mymodule'
    """
    if not (name == "cqcode" or name.startswith("cqcode.")):
        name = f"cqcode.{name}"
    return logging.getLogger(name)
