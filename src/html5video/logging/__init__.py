"""Structured logging module for html5video.

Provides configurable logging with JSON format support and file rotation.
"""

from html5video.logging.config import configure_logging
from html5video.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
