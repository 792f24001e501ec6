"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. Explicit overrides (CLI flags or keyword arguments)
2. Environment variables (HTML5VIDEO_*)
3. Config file (~/.html5video/config.toml)
4. Default values

Environment variables:
- HTML5VIDEO_FFMPEG_PATH: ffmpeg binary
- HTML5VIDEO_QT_FASTSTART_PATH: qt-faststart binary
- HTML5VIDEO_PROFILE_DIRS: profile directories, os.pathsep separated
- HTML5VIDEO_TMP_DIR: directory for the capability cache
- HTML5VIDEO_CACHE_TTL_HOURS: capability cache TTL (0 = never expires)
- HTML5VIDEO_ENCODE_TIMEOUT: timeout for encode runs in seconds
- HTML5VIDEO_LOG_LEVEL / HTML5VIDEO_LOG_FILE: logging overrides
- HTML5VIDEO_CONFIG_PATH: config file (overrides default location)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from html5video.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from html5video.config.env import EnvReader
from html5video.config.models import DEFAULT_DATA_DIR, Html5VideoConfig
from html5video.config.toml_parser import TomlParseError, load_toml_file
from html5video.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = DEFAULT_DATA_DIR / "config.toml"


def get_default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Get the config file path.

    Can be overridden by HTML5VIDEO_CONFIG_PATH environment variable.
    """
    env_path = EnvReader(env).get_path("CONFIG_PATH")
    return env_path if env_path is not None else DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If strict and the file is not valid TOML.
    """
    path = path if path is not None else get_default_config_path()
    try:
        return load_toml_file(path, strict=strict)
    except TomlParseError as e:
        raise ConfigError(str(e)) from e


def get_config(
    config_path: Path | None = None,
    *,
    overrides: ConfigSource | None = None,
    env: Mapping[str, str] | None = None,
    strict: bool = False,
) -> Html5VideoConfig:
    """Build the effective configuration.

    Args:
        config_path: Config file to read. None uses the default location.
        overrides: Highest-precedence values (e.g. from CLI flags).
        env: Environment mapping, os.environ when None.
        strict: Raise on an invalid config file instead of ignoring it.

    Returns:
        Resolved Html5VideoConfig.

    Raises:
        ConfigError: If the config file is invalid (strict) or a resolved
            value fails validation.
    """
    reader = EnvReader(env)
    if config_path is None:
        config_path = get_default_config_path(env)

    builder = ConfigBuilder()
    builder.apply(source_from_file(load_config_file(config_path, strict=strict)))
    builder.apply(source_from_env(reader))
    if overrides is not None:
        builder.apply(overrides)

    try:
        config = builder.build()
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug(
        "Configuration loaded",
        extra={
            "config_path": str(config_path),
            "ffmpeg": config.tools.ffmpeg,
            "profile_dirs": [str(d) for d in config.profile_dirs],
        },
    )
    return config
