"""Encoding profile lookup.

Profiles are named bags of encoding parameters stored as `<name>.profile`
files. They are searched in an ordered list of directories; the built-in
profile directory shipped with the package is always searched last.
Profile files hold JSON (or any YAML, of which JSON is a subset) and are
passed through to the converters without interpretation.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from html5video.exceptions import Html5VideoError

logger = logging.getLogger(__name__)

PROFILE_SUFFIX = ".profile"

BUILTIN_PROFILES_DIR = Path(__file__).resolve().parent.parent / "profiles"

_PROFILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class ProfileError(Html5VideoError):
    """Error loading a profile."""

    pass


class ProfileNotFoundError(ProfileError):
    """Profile does not exist in any profile directory."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Profile {name} not found")


def _is_readable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.R_OK | os.X_OK)


class ProfileRepository:
    """Resolves profile names against an ordered list of directories."""

    def __init__(self, dirs: Iterable[Path | str] = ()) -> None:
        """Initialize the repository.

        Args:
            dirs: User profile directories in search order. The built-in
                directory is appended after them.
        """
        self.dirs: list[Path] = [Path(d).expanduser() for d in dirs]
        self.dirs.append(BUILTIN_PROFILES_DIR)

    def _readable_dirs(self) -> list[Path]:
        readable = []
        for directory in self.dirs:
            if _is_readable_dir(directory):
                readable.append(directory)
            else:
                logger.debug("Skipping unreadable profile directory: %s", directory)
        return readable

    def find_profile(self, name: str) -> Path | None:
        """Return the path of the first readable `<name>.profile`, if any.

        Raises:
            ProfileError: If the name is not a plain file stem.
        """
        if not _PROFILE_NAME_PATTERN.match(name) or name in (".", ".."):
            raise ProfileError(f"Invalid profile name: {name!r}")

        for directory in self._readable_dirs():
            candidate = directory / f"{name}{PROFILE_SUFFIX}"
            if candidate.is_file() and os.access(candidate, os.R_OK):
                return candidate
        return None

    def get_profile(self, name: str) -> Any:
        """Read a profile by name.

        The first match in search order wins; later directories are not
        consulted.

        Args:
            name: Profile name (without .profile extension).

        Returns:
            Decoded profile content.

        Raises:
            ProfileNotFoundError: If no directory holds the profile.
            ProfileError: If the name is invalid or the file cannot be decoded.
        """
        path = self.find_profile(name)
        if path is None:
            raise ProfileNotFoundError(name)

        try:
            with open(path, encoding="utf-8") as f:
                profile = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProfileError(f"Invalid content in profile {name}: {e}") from e
        except OSError as e:
            raise ProfileError(f"Could not read profile {name}: {e}") from e

        logger.debug("Loaded profile %s from %s", name, path)
        return profile

    def list_profiles(self) -> list[str]:
        """List profile names across all readable directories.

        Names appear in discovery order; a name present in several
        directories is listed once per directory.

        Returns:
            List of profile names (without .profile extension).
        """
        profiles: list[str] = []
        for directory in self._readable_dirs():
            for entry in sorted(directory.iterdir()):
                if entry.name.endswith(PROFILE_SUFFIX) and entry.name != PROFILE_SUFFIX:
                    profiles.append(entry.name[: -len(PROFILE_SUFFIX)])
        return profiles
