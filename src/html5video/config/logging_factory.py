"""Apply the CLI logging options on top of the [logging] config section."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from html5video.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    json_format: bool = False,
) -> LoggingConfig:
    """Merge --log-level, --log-file and --log-json into base.

    Options left at their default keep the configured value; --log-json can
    only switch JSON output on. Rotation settings always come from base.

    Raises:
        ValueError: If level is not a known log level.
    """
    changes: dict[str, object] = {}
    if level is not None:
        changes["level"] = level
    if file is not None:
        changes["file"] = file
    if json_format:
        changes["format"] = "json"
    return replace(base, **changes)
