"""Display formatting helpers for CLI output."""

from __future__ import annotations


def format_version(version: tuple[int, ...] | None) -> str:
    """Format a version tuple as dotted string.

    Args:
        version: Version tuple, or None when detection failed.

    Returns:
        "1.2.3" style string, or "unknown".
    """
    if not version:
        return "unknown"
    return ".".join(str(part) for part in version)


def format_duration(seconds: float | None) -> str:
    """Format seconds as HH:MM:SS.ss.

    Args:
        seconds: Duration in seconds, or None.

    Returns:
        Formatted duration, or "-" when unknown.
    """
    if seconds is None:
        return "-"
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{int(hours):02d}:{int(minutes):02d}:{secs:05.2f}"
