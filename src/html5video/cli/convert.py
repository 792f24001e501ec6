"""html5video probe and convert commands."""

import json
import sys
from pathlib import Path
from typing import NoReturn

import click

from html5video.cli.exit_codes import ExitCode
from html5video.config.profiles import ProfileError, ProfileNotFoundError
from html5video.core.formatting import format_duration
from html5video.exceptions import (
    EncoderNotFoundError,
    UnreadableSourceError,
    UnsupportedContainerError,
)
from html5video.executor.factory import CONTAINER_CODECS
from html5video.service import Html5Video


def _fail(message: str, code: ExitCode) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


@click.command("probe")
@click.argument("src", type=click.Path(path_type=Path))
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in JSON format.",
)
@click.pass_obj
def probe_command(obj: dict, src: Path, json_output: bool) -> None:
    """Show duration, stream counts and frame size of a media file."""
    service: Html5Video = obj["service"]
    try:
        info = service.get_video_info(src)
    except UnreadableSourceError as e:
        _fail(str(e), ExitCode.SOURCE_NOT_READABLE)

    if info is None:
        _fail(f"ffmpeg produced no output for {src}", ExitCode.GENERAL_ERROR)

    if json_output:
        click.echo(json.dumps(info.to_dict(), indent=2))
        return

    size = f"{info.width}x{info.height}" if info.width and info.height else "-"
    click.echo(f"File:     {src}")
    click.echo(f"Duration: {format_duration(info.duration)}")
    click.echo(f"Video:    {info.video_streams} stream(s), {size}")
    click.echo(f"Audio:    {info.audio_streams} stream(s)")


@click.command("convert")
@click.argument("src", type=click.Path(path_type=Path))
@click.argument("dst", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--format",
    "target_format",
    type=click.Choice(sorted(CONTAINER_CODECS)),
    default=None,
    help="Target container (default: taken from the DST extension).",
)
@click.option(
    "--profile",
    "profile_name",
    default="default",
    show_default=True,
    help="Encoding profile name.",
)
@click.option("--width", type=click.IntRange(min=1), default=None, help="Frame width.")
@click.option(
    "--height", type=click.IntRange(min=1), default=None, help="Frame height."
)
@click.option("--no-audio", is_flag=True, help="Drop the audio track.")
@click.pass_obj
def convert_command(
    obj: dict,
    src: Path,
    dst: Path,
    target_format: str | None,
    profile_name: str,
    width: int | None,
    height: int | None,
    no_audio: bool,
) -> None:
    """Convert SRC into an HTML5 video at DST.

    Examples:

        # 720p mp4 with the moov atom moved to the front
        html5video convert talk.mov talk.mp4 --profile 720p-hd

        # webm without audio
        html5video convert clip.avi clip.webm --no-audio
    """
    service: Html5Video = obj["service"]

    if target_format is None:
        target_format = dst.suffix.lstrip(".").lower()

    options: dict = {}
    if width is not None:
        options["width"] = width
    if height is not None:
        options["height"] = height
    if no_audio:
        options["audio"] = False

    try:
        result = service.create(src, dst, target_format, profile_name, options)
    except UnreadableSourceError as e:
        _fail(str(e), ExitCode.SOURCE_NOT_READABLE)
    except ProfileNotFoundError as e:
        _fail(str(e), ExitCode.PROFILE_NOT_FOUND)
    except ProfileError as e:
        _fail(str(e), ExitCode.GENERAL_ERROR)
    except UnsupportedContainerError as e:
        _fail(str(e), ExitCode.UNSUPPORTED_CONTAINER)
    except EncoderNotFoundError as e:
        _fail(str(e), ExitCode.ENCODER_NOT_FOUND)

    if not result.success:
        _fail(result.message, ExitCode.CONVERSION_FAILED)

    click.echo(f"Created {dst}")
