"""Configuration data models.

This module defines dataclasses for html5video configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path

# Default data location (config file and capability cache)
DEFAULT_DATA_DIR = Path.home() / ".html5video"


@dataclass
class ToolPathsConfig:
    """Configuration for external tool binaries.

    Bare names are looked up in PATH by the operating system.
    """

    ffmpeg: str = "ffmpeg"
    qt_faststart: str = "qt-faststart"

    # Timeout for -version, -codecs and -i probes (seconds)
    probe_timeout: float = 10.0

    # Timeout for encode runs (seconds, None = wait until done)
    encode_timeout: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.ffmpeg or not self.ffmpeg.strip():
            raise ValueError("ffmpeg binary must not be empty")
        if not self.qt_faststart or not self.qt_faststart.strip():
            raise ValueError("qt-faststart binary must not be empty")
        if self.probe_timeout <= 0:
            raise ValueError(
                f"probe_timeout must be positive, got {self.probe_timeout}"
            )
        if self.encode_timeout is not None and self.encode_timeout <= 0:
            raise ValueError(
                f"encode_timeout must be positive, got {self.encode_timeout}"
            )


@dataclass
class CacheConfig:
    """Configuration for the capability cache."""

    # Directory for cached tool facts
    directory: Path = DEFAULT_DATA_DIR

    # Cache TTL in hours (0 = never expires)
    ttl_hours: int = 24

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.ttl_hours < 0:
            raise ValueError(f"ttl_hours must be non-negative, got {self.ttl_hours}")


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class Html5VideoConfig:
    """Main configuration container."""

    tools: ToolPathsConfig = field(default_factory=ToolPathsConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # User profile directories, searched in order before the built-in one
    profile_dirs: list[Path] = field(default_factory=list)
