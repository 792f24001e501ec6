"""HTML5 video conversion service.

Html5Video is the public entry point: it wires the process runner, the
capability cache, detection, profile lookup and converter construction
together and exposes one method per operation.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from html5video.config.loader import get_config
from html5video.config.models import Html5VideoConfig
from html5video.config.profiles import ProfileRepository
from html5video.core.subprocess_utils import ProcessRunner, SubprocessRunner
from html5video.exceptions import UnreadableSourceError
from html5video.executor.converters import ConversionResult, GenericConverter
from html5video.executor.drivers import FfmpegDriver, select_driver
from html5video.executor.factory import ConverterFactory
from html5video.tools.cache import FileCache, KeyValueCache
from html5video.tools.detection import CapabilityDetector, VersionProbe
from html5video.tools.models import MediaInfo, Version
from html5video.tools.parsers import parse_media_info

logger = logging.getLogger(__name__)


class Html5Video:
    """Converts media into browser-compatible video with ffmpeg.

    Example:
        >>> video = Html5Video()
        >>> result = video.create("in.mov", "out.mp4", "mp4", "720p-hd")
        >>> result.success
        True
    """

    def __init__(
        self,
        config: Html5VideoConfig | None = None,
        cache: KeyValueCache | None = None,
        runner: ProcessRunner | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Configuration. Loaded from file and environment if None.
            cache: Capability cache. A FileCache in the configured cache
                directory if None.
            runner: Process runner used for probes and encodes. Defaults to
                subprocess runners with the configured timeouts.
        """
        self.config = config if config is not None else get_config()
        self.cache = cache if cache is not None else FileCache(
            self.config.cache.directory, ttl_hours=self.config.cache.ttl_hours
        )

        tools = self.config.tools
        if runner is not None:
            probe_runner = encode_runner = runner
        else:
            probe_runner = SubprocessRunner(timeout=tools.probe_timeout)
            encode_runner = SubprocessRunner(timeout=tools.encode_timeout)
        self.runner = probe_runner

        self.version_probe = VersionProbe(probe_runner, self.cache, tools.ffmpeg)
        self.detector = CapabilityDetector(
            probe_runner, self.cache, tools.ffmpeg, self.version_probe
        )
        self.profiles = ProfileRepository(self.config.profile_dirs)
        self.factory = ConverterFactory(
            encode_runner,
            self.config,
            self.profiles,
            self.detector,
            self.version_probe,
        )

    def get_version(self) -> Version | None:
        """Get the ffmpeg version, or None if it could not be detected."""
        return self.version_probe.get_version()

    def get_encoders(self) -> list[str]:
        """Get the sorted list of usable ffmpeg encoders."""
        return self.detector.get_encoders()

    def get_driver(self) -> FfmpegDriver:
        """Get the command-line driver for the installed ffmpeg."""
        return select_driver(self.get_version())

    def clear_cache(self) -> None:
        """Forget detected ffmpeg facts so the next query probes again."""
        self.cache.invalidate()

    def get_profile(self, name: str) -> Any:
        """Read a profile by name.

        Raises:
            ProfileNotFoundError: If no profile directory holds it.
        """
        return self.profiles.get_profile(name)

    def list_profiles(self) -> list[str]:
        """List available profile names across all profile directories."""
        return self.profiles.list_profiles()

    def get_video_info(self, src: Path | str) -> MediaInfo | None:
        """Get stream information about a media file.

        Args:
            src: Media file.

        Returns:
            MediaInfo, or None if ffmpeg produced no output.

        Raises:
            UnreadableSourceError: If src is missing or not readable. No
                process is started in that case.
        """
        path = Path(src)
        if not path.is_file() or not os.access(path, os.R_OK):
            raise UnreadableSourceError(str(src))

        # ffmpeg -i without an output exits non-zero; the stream dump is
        # still complete
        _rc, lines = self.runner.run(self.config.tools.ffmpeg, ["-i", str(path)])
        if not lines:
            logger.warning("ffmpeg produced no output for %s", path)
            return None
        return parse_media_info(lines)

    def create_converter(
        self, target_format: str, profile_name: str
    ) -> GenericConverter:
        """Create a converter for the container and profile.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            UnsupportedContainerError: If the container is unknown.
            EncoderNotFoundError: If ffmpeg lacks a matching encoder.
        """
        return self.factory.create_converter(target_format, profile_name)

    def merge_options(
        self, src: Path | str, options: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        """Fill in size and audio options from the source.

        When neither width nor height is given, the source is probed: its
        video dimensions are copied into the options, and audio is disabled
        if it has no audio stream.

        Args:
            src: Source media file.
            options: Caller options; not modified.

        Returns:
            New options dict.

        Raises:
            UnreadableSourceError: If the source must be probed and is not
                readable.
        """
        merged = dict(options or {})
        if merged.get("width") is not None or merged.get("height") is not None:
            return merged

        info = self.get_video_info(src)
        if info is None:
            return merged

        if info.width is not None and info.height is not None:
            merged["width"] = info.width
            merged["height"] = info.height
        if not info.has_audio():
            logger.info("Source %s has no audio stream, disabling audio", src)
            merged["audio"] = False
        return merged

    def create(
        self,
        src: Path | str,
        dst: Path | str,
        target_format: str,
        profile_name: str,
        options: Mapping[str, Any] | None = None,
    ) -> ConversionResult:
        """Convert a media file into an HTML5 video.

        Args:
            src: Source media file.
            dst: Output file.
            target_format: Target container (mp4, webm, ogg).
            profile_name: Profile name.
            options: Additional options (width, height, audio, overwrite).

        Returns:
            ConversionResult of the conversion.

        Raises:
            UnreadableSourceError: If the source is not readable.
            ProfileNotFoundError: If the profile does not exist.
            UnsupportedContainerError: If the container is unknown.
            EncoderNotFoundError: If ffmpeg lacks a matching encoder.
        """
        merged = self.merge_options(src, options)
        converter = self.create_converter(target_format, profile_name)
        result = converter.create(src, dst, merged)
        if result.success:
            logger.info("Created %s from %s", dst, src)
        return result
