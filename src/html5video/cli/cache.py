"""CLI commands for the capability cache."""

import click

from html5video.service import Html5Video


@click.group("cache")
def cache_group() -> None:
    """Manage cached ffmpeg detection results."""
    pass


@cache_group.command("clear")
@click.pass_obj
def clear_cache(obj: dict) -> None:
    """Delete cached ffmpeg version and encoder list.

    The next command that needs them probes ffmpeg again.
    """
    service: Html5Video = obj["service"]
    service.clear_cache()
    click.echo("Capability cache cleared.")
