"""External tool detection and capability management.

This module provides infrastructure for detecting, caching and querying the
capabilities of the installed ffmpeg: its version and usable encoders.
"""

from html5video.tools.cache import (
    FileCache,
    KeyValueCache,
    MemoryCache,
)
from html5video.tools.detection import (
    CapabilityDetector,
    VersionProbe,
    is_version_greater_or_equal,
)
from html5video.tools.models import CacheKey, MediaInfo, Version
from html5video.tools.parsers import (
    parse_encoders,
    parse_media_info,
    parse_version,
)

__all__ = [
    # Models
    "CacheKey",
    "MediaInfo",
    "Version",
    # Parsers
    "parse_encoders",
    "parse_media_info",
    "parse_version",
    # Detection
    "CapabilityDetector",
    "VersionProbe",
    "is_version_greater_or_equal",
    # Cache
    "FileCache",
    "KeyValueCache",
    "MemoryCache",
]
