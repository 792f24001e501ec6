"""HTML5VIDEO_* environment variables.

EnvReader looks settings up by their short name ("FFMPEG_PATH" reads
HTML5VIDEO_FFMPEG_PATH) and returns None for anything unset, so the result
plugs straight into a ConfigSource.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

ENV_PREFIX = "HTML5VIDEO_"

_N = TypeVar("_N", int, float)


class EnvReader:
    """Typed access to HTML5VIDEO_* variables.

    Example:
        reader = EnvReader(env={"HTML5VIDEO_CACHE_TTL_HOURS": "1"})
        reader.get_int("CACHE_TTL_HOURS")  # 1
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX
    ) -> None:
        """Initialize the reader.

        Args:
            env: Mapping to read instead of os.environ.
            prefix: Prepended to every name passed to the getters.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ
        self.prefix = prefix

    def var(self, name: str) -> str:
        """Full variable name for a setting."""
        return self.prefix + name

    def get_str(self, name: str) -> str | None:
        return self._env.get(self.var(name))

    def get_int(self, name: str) -> int | None:
        """Integer setting; an unparseable value is logged and ignored."""
        return self._get_number(name, int)

    def get_float(self, name: str) -> float | None:
        """Float setting such as a timeout in seconds."""
        return self._get_number(name, float)

    def get_path(self, name: str) -> Path | None:
        """Path setting with ~ expanded; empty counts as unset."""
        value = self.get_str(name)
        return Path(value).expanduser() if value else None

    def get_path_list(self, name: str) -> list[Path] | None:
        """os.pathsep-separated directories, in the order given.

        Blank entries are skipped. None when nothing usable is set.
        """
        value = self.get_str(name) or ""
        paths = [
            Path(part.strip()).expanduser()
            for part in value.split(os.pathsep)
            if part.strip()
        ]
        return paths or None

    def _get_number(self, name: str, convert: Callable[[str], _N]) -> _N | None:
        value = self.get_str(name)
        if value is None:
            return None
        try:
            return convert(value)
        except ValueError:
            logger.warning(
                "Ignoring %s=%r: not a valid %s",
                self.var(name),
                value,
                convert.__name__,
            )
            return None
