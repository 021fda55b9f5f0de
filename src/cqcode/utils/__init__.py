"""Utility modules for cqcode.

Provides:
- logger: get_logger for namespaced logging
"""

from cqcode.utils.logger import get_logger

__all__ = [
    "get_logger",
]
