"""Data models for detected tool facts.

This module defines the types shared by the output parsers, the detection
probes and the capability cache.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

# (major, minor, patch) as reported by ffmpeg -version
Version: TypeAlias = tuple[int, int, int]


class CacheKey(Enum):
    """Names of the values kept in the capability cache."""

    VERSION = "version"  # Version list, or False when detection failed
    ENCODERS = "encoders"  # Sorted encoder name list


@dataclass(frozen=True)
class MediaInfo:
    """Stream summary of a media file as reported by ffmpeg -i."""

    video_streams: int = 0
    audio_streams: int = 0
    duration: float | None = None  # Seconds, only when a Duration line was seen
    width: int | None = None  # Only when a video stream dimension was parsed
    height: int | None = None

    def has_video(self) -> bool:
        """Return True if at least one video stream was found."""
        return self.video_streams > 0

    def has_audio(self) -> bool:
        """Return True if at least one audio stream was found."""
        return self.audio_streams > 0

    def to_dict(self) -> dict[str, float | int | None]:
        """Return a JSON-compatible representation."""
        return {
            "duration": self.duration,
            "video_streams": self.video_streams,
            "audio_streams": self.audio_streams,
            "width": self.width,
            "height": self.height,
        }
