"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building Html5VideoConfig by
composing configuration sources with explicit precedence handling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from html5video.config.env import EnvReader
from html5video.config.models import (
    DEFAULT_DATA_DIR,
    CacheConfig,
    Html5VideoConfig,
    LoggingConfig,
    ToolPathsConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Tools
    ffmpeg_bin: str | None = None
    qt_faststart_bin: str | None = None
    probe_timeout: float | None = None
    encode_timeout: float | None = None

    # Profiles
    profile_dirs: list[Path] | None = None

    # Cache
    cache_dir: Path | None = None
    cache_ttl_hours: int | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds Html5VideoConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values). Profile
    directory lists replace each other rather than merging, so a list from
    the environment hides the one from the config file.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> Html5VideoConfig:
        """Build the final Html5VideoConfig with defaults for unset values.

        Raises:
            ValueError: If a resolved value fails model validation.
        """
        tools = ToolPathsConfig(
            ffmpeg=self._get("ffmpeg_bin", "ffmpeg"),
            qt_faststart=self._get("qt_faststart_bin", "qt-faststart"),
            probe_timeout=self._get("probe_timeout", 10.0),
            encode_timeout=self._get("encode_timeout", None),
        )

        cache = CacheConfig(
            directory=self._get("cache_dir", DEFAULT_DATA_DIR),
            ttl_hours=self._get("cache_ttl_hours", 24),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "warning"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        return Html5VideoConfig(
            tools=tools,
            cache=cache,
            logging=logging_config,
            profile_dirs=list(self._get("profile_dirs", [])),
        )


def _optional_path(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from parsed TOML config file.

    Args:
        file_config: Parsed configuration dictionary from TOML file.

    Returns:
        ConfigSource with values from the config file.
    """
    tools = file_config.get("tools", {})
    profiles = file_config.get("profiles", {})
    cache = file_config.get("cache", {})
    logging_conf = file_config.get("logging", {})

    profile_dirs: list[Path] | None = None
    if profiles.get("dirs"):
        profile_dirs = [Path(d).expanduser() for d in profiles["dirs"]]

    return ConfigSource(
        # Tools
        ffmpeg_bin=tools.get("ffmpeg"),
        qt_faststart_bin=tools.get("qt_faststart"),
        probe_timeout=tools.get("probe_timeout"),
        encode_timeout=tools.get("encode_timeout"),
        # Profiles
        profile_dirs=profile_dirs,
        # Cache
        cache_dir=_optional_path(cache.get("directory")),
        cache_ttl_hours=cache.get("ttl_hours"),
        # Logging
        logging_level=logging_conf.get("level"),
        logging_file=_optional_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from HTML5VIDEO_* environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        ffmpeg_bin=reader.get_str("FFMPEG_PATH"),
        qt_faststart_bin=reader.get_str("QT_FASTSTART_PATH"),
        encode_timeout=reader.get_float("ENCODE_TIMEOUT"),
        profile_dirs=reader.get_path_list("PROFILE_DIRS"),
        cache_dir=reader.get_path("TMP_DIR"),
        cache_ttl_hours=reader.get_int("CACHE_TTL_HOURS"),
        logging_level=reader.get_str("LOG_LEVEL"),
        logging_file=reader.get_path("LOG_FILE"),
    )
