"""Core utilities package.

This package contains small helpers shared across html5video with no
dependency on the rest of the codebase: subprocess invocation, the process
runner abstraction and display formatting.
"""

from html5video.core.formatting import format_duration, format_version
from html5video.core.subprocess_utils import (
    ProcessRunner,
    SubprocessRunner,
    run_command,
)

__all__ = [
    "ProcessRunner",
    "SubprocessRunner",
    "format_duration",
    "format_version",
    "run_command",
]
