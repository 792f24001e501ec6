"""Configuration management for html5video.

This module provides configuration loading with precedence handling:
1. CLI flags / explicit overrides (highest priority)
2. Environment variables (HTML5VIDEO_*)
3. Config file (~/.html5video/config.toml)
4. Default values (lowest priority)

It also hosts profile lookup, since profile directories are part of the
configuration surface.
"""

from html5video.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from html5video.config.env import EnvReader
from html5video.config.loader import (
    get_config,
    get_default_config_path,
    load_config_file,
)
from html5video.config.logging_factory import build_logging_config
from html5video.config.models import (
    CacheConfig,
    Html5VideoConfig,
    LoggingConfig,
    ToolPathsConfig,
)
from html5video.config.profiles import (
    BUILTIN_PROFILES_DIR,
    ProfileError,
    ProfileNotFoundError,
    ProfileRepository,
)
from html5video.config.toml_parser import (
    TomlParseError,
    load_toml_file,
    parse_toml,
)

__all__ = [
    # Models
    "CacheConfig",
    "Html5VideoConfig",
    "LoggingConfig",
    "ToolPathsConfig",
    # Loader
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Layering
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
    "parse_toml",
    "load_toml_file",
    "TomlParseError",
    # Profiles
    "BUILTIN_PROFILES_DIR",
    "ProfileError",
    "ProfileNotFoundError",
    "ProfileRepository",
]
