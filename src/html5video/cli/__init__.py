"""CLI module for html5video."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from html5video.cli.exit_codes import ExitCode
from html5video.config import build_logging_config, get_config
from html5video.config.models import Html5VideoConfig
from html5video.exceptions import ConfigError
from html5video.logging import configure_logging
from html5video.service import Html5Video

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    config: Html5VideoConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the config file and CLI options.

    Args:
        config: Effective configuration.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    configure_logging(
        build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            json_format=log_json,
        )
    )
    _logging_configured = True


@click.group()
@click.version_option(package_name="html5video")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.html5video/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """html5video - Convert media into browser-playable HTML5 video."""
    ctx.ensure_object(dict)

    # Preserve a service passed in by callers (tests)
    if "service" in ctx.obj:
        return

    try:
        # An explicitly named config file must parse
        config = get_config(config_path, strict=config_path is not None)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    _configure_logging(config, log_level, log_file, log_json)
    logger.debug("html5video starting with ffmpeg=%s", config.tools.ffmpeg)

    ctx.obj["config"] = config
    ctx.obj["service"] = Html5Video(config)


# Defer import to avoid circular dependency
def _register_commands():
    from html5video.cli.cache import cache_group
    from html5video.cli.convert import convert_command, probe_command
    from html5video.cli.info import info_command
    from html5video.cli.profiles import profiles_group

    main.add_command(info_command)
    main.add_command(profiles_group)
    main.add_command(probe_command)
    main.add_command(convert_command)
    main.add_command(cache_group)


_register_commands()
