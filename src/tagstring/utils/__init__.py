"""Utility modules for tagstring.

Provides:
- logger: get_logger for logging
"""

from tagstring.utils.logger import get_logger

__all__ = [
    "get_logger",
]
