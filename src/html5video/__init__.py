"""html5video - ffmpeg wrapper for HTML5 video.

Converts arbitrary source media into browser-compatible mp4, webm and ogg
files by driving the installed ffmpeg binary with version-appropriate
arguments and named encoding profiles.
"""

from html5video.exceptions import (
    EncoderNotFoundError,
    Html5VideoError,
    UnreadableSourceError,
    UnsupportedContainerError,
)
from html5video.service import Html5Video

__version__ = "0.1.0"

__all__ = [
    "EncoderNotFoundError",
    "Html5Video",
    "Html5VideoError",
    "UnreadableSourceError",
    "UnsupportedContainerError",
    "__version__",
]
