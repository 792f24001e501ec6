"""html5video info command.

Reports the detected ffmpeg version, the command-line driver chosen for it
and the encoders ffmpeg offers.
"""

import json

import click

from html5video.core.formatting import format_version
from html5video.executor.factory import CONTAINER_CODECS
from html5video.service import Html5Video


def _container_support(encoders: list[str]) -> dict[str, bool]:
    """Check which target containers have both encoders available."""
    support = {}
    for container, keywords in sorted(CONTAINER_CODECS.items()):
        support[container] = all(
            any(keyword in encoder for encoder in encoders) for keyword in keywords
        )
    return support


@click.command("info")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.option(
    "--refresh",
    is_flag=True,
    help="Force refresh of ffmpeg detection (ignore cache)",
)
@click.pass_obj
def info_command(obj: dict, json_output: bool, refresh: bool) -> None:
    """Show ffmpeg version, driver and encoders.

    Detection results are cached; use --refresh to probe ffmpeg again.
    """
    service: Html5Video = obj["service"]
    if refresh:
        service.clear_cache()

    version = service.get_version()
    driver = service.get_driver()
    encoders = service.get_encoders()
    support = _container_support(encoders)

    if json_output:
        data = {
            "ffmpeg": service.config.tools.ffmpeg,
            "version": list(version) if version is not None else None,
            "driver": driver.variant.value,
            "containers": support,
            "encoders": encoders,
        }
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(f"ffmpeg:   {service.config.tools.ffmpeg}")
    click.echo(f"Version:  {format_version(version)}")
    click.echo(f"Driver:   {driver.variant.value}")
    click.echo(
        "Formats:  "
        + ", ".join(
            f"{name} ({'yes' if ok else 'no'})" for name, ok in support.items()
        )
    )
    click.echo(f"Encoders: {len(encoders)}")
    for encoder in encoders:
        click.echo(f"  {encoder}")
