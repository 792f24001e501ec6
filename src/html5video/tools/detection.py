"""ffmpeg version and encoder detection.

This module probes the installed ffmpeg for its version and the encoders it
can use. Both results are cached; probing is best-effort and never raises,
so a missing or broken binary degrades to "unknown version" and an empty
encoder list.
"""

import logging
from collections.abc import Sequence

from html5video.core.subprocess_utils import ProcessRunner
from html5video.tools.cache import KeyValueCache
from html5video.tools.models import CacheKey, Version
from html5video.tools.parsers import parse_encoders, parse_version

logger = logging.getLogger(__name__)

# ffmpeg 0.8 renamed the codec table listing from -formats to -codecs
CODECS_FLAG_MIN_VERSION = (0, 8)

# Cached in place of a version when detection failed
_DETECTION_FAILED = False


def is_version_greater_or_equal(
    version: Sequence[int] | None, other: Sequence[int]
) -> bool:
    """Check if version is greater than or equal to other.

    Components are compared pairwise over the common prefix: trailing
    components of the longer sequence are ignored, and version passes only
    if none of its components is lower than the matching one in other. So
    (1, 2, 3) >= (1, 2), but (1, 2, 3) is not >= (0, 8) because 2 < 8.

    Args:
        version: Detected version, or None when unknown (compares as empty).
        other: Version prefix to compare against.

    Returns:
        True if no compared component of version is below other's.
    """
    return all(mine >= theirs for mine, theirs in zip(version or (), other))


class VersionProbe:
    """Detects and caches the installed ffmpeg version."""

    def __init__(
        self, runner: ProcessRunner, cache: KeyValueCache, ffmpeg_bin: str
    ) -> None:
        self.runner = runner
        self.cache = cache
        self.ffmpeg_bin = ffmpeg_bin

    def get_version(self) -> Version | None:
        """Get the current ffmpeg version.

        A cached result (including a cached failure) is returned without
        running ffmpeg. Otherwise `ffmpeg -version` is run and the outcome
        is written to the cache before returning.

        Returns:
            (major, minor, patch), or None if detection failed.
        """
        cached = self.cache.read(CacheKey.VERSION, None)
        if cached is not None:
            return tuple(cached) if cached is not _DETECTION_FAILED else None

        version: Version | None = None
        rc, lines = self.runner.run(self.ffmpeg_bin, ["-version"])
        if rc == 0 and lines:
            version = parse_version(lines[0])
            if version is None:
                logger.warning("Could not parse ffmpeg version from %r", lines[0])
        else:
            logger.warning("Failed to get ffmpeg version (exit code %d)", rc)

        self.cache.write(
            CacheKey.VERSION, list(version) if version else _DETECTION_FAILED
        )
        logger.debug("Detected ffmpeg version: %s", version)
        return version


class CapabilityDetector:
    """Detects and caches the encoders ffmpeg can use."""

    def __init__(
        self,
        runner: ProcessRunner,
        cache: KeyValueCache,
        ffmpeg_bin: str,
        version_probe: VersionProbe,
    ) -> None:
        self.runner = runner
        self.cache = cache
        self.ffmpeg_bin = ffmpeg_bin
        self.version_probe = version_probe

    def listing_args(self) -> list[str]:
        """Return the codec listing arguments for the installed version."""
        version = self.version_probe.get_version()
        if is_version_greater_or_equal(version, CODECS_FLAG_MIN_VERSION):
            return ["-codecs"]
        return ["-formats"]

    def get_encoders(self) -> list[str]:
        """Get supported encoder names.

        Empty tool output is not cached so a later call can retry, e.g. when
        the binary was temporarily unavailable.

        Returns:
            Sorted list of encoder names (possibly empty).
        """
        cached = self.cache.read(CacheKey.ENCODERS, None)
        if cached is not None:
            return list(cached)

        _rc, lines = self.runner.run(self.ffmpeg_bin, self.listing_args())
        if not lines:
            logger.warning("ffmpeg produced no codec listing")
            return []

        encoders = parse_encoders(lines)
        self.cache.write(CacheKey.ENCODERS, encoders)
        logger.debug("Detected %d ffmpeg encoders", len(encoders))
        return encoders

    def search_encoder(self, needle: str) -> str | None:
        """Find the first encoder whose name contains needle.

        Args:
            needle: Codec keyword such as "x264" or "vorbis".

        Returns:
            Matching encoder name in sorted order, or None.
        """
        for encoder in self.get_encoders():
            if needle in encoder:
                return encoder
        return None
