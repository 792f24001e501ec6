"""CLI commands for encoding profiles."""

import json
import sys
from collections.abc import Mapping

import click
import yaml

from html5video.cli.exit_codes import ExitCode
from html5video.config.profiles import ProfileError, ProfileNotFoundError
from html5video.service import Html5Video


def _describe(profile: object) -> str:
    if isinstance(profile, Mapping):
        return str(profile.get("description") or "-")
    return "-"


@click.group("profiles")
def profiles_group() -> None:
    """Inspect encoding profiles."""
    pass


@profiles_group.command("list")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in JSON format.",
)
@click.pass_obj
def list_profiles_cmd(obj: dict, json_output: bool) -> None:
    """List available encoding profiles.

    Profiles are *.profile files in the configured profile directories,
    followed by the built-in profiles. A name found in more than one
    directory is listed once per directory; the first one wins on lookup.

    Examples:

        # List all profiles
        html5video profiles list

        # Output as JSON
        html5video profiles list --json
    """
    service: Html5Video = obj["service"]
    profile_names = service.list_profiles()

    if json_output:
        click.echo(json.dumps(profile_names, indent=2))
        return

    if not profile_names:
        click.echo("No profiles found in:")
        for directory in service.profiles.dirs:
            click.echo(f"  {directory}")
        return

    click.echo(f"{'NAME':<15} {'DESCRIPTION':<50}")
    click.echo("-" * 66)
    for name in profile_names:
        try:
            desc = _describe(service.get_profile(name))
        except ProfileError as e:
            desc = f"(error: {e})"
        click.echo(f"{name:<15} {desc[:50]:<50}")


@profiles_group.command("show")
@click.argument("profile_name")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in JSON format.",
)
@click.pass_obj
def show_profile(obj: dict, profile_name: str, json_output: bool) -> None:
    """Show the contents of a profile.

    PROFILE_NAME is the name of the profile (without .profile extension).
    """
    service: Html5Video = obj["service"]
    try:
        profile = service.get_profile(profile_name)
    except ProfileNotFoundError:
        click.echo(f"Error: Profile '{profile_name}' not found.", err=True)
        available = service.list_profiles()
        if available:
            click.echo("\nAvailable profiles:", err=True)
            for name in dict.fromkeys(available):
                click.echo(f"  - {name}", err=True)
        sys.exit(ExitCode.PROFILE_NOT_FOUND)
    except ProfileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(ExitCode.GENERAL_ERROR)

    if json_output:
        click.echo(json.dumps(profile, indent=2))
        return

    click.echo(yaml.safe_dump(profile, sort_keys=False), nl=False)
