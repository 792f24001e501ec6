"""Converter construction.

Ties a target container, a named profile, the detected encoders and the
detected ffmpeg version into a ready-to-run converter.
"""

from __future__ import annotations

import logging

from html5video.config.models import Html5VideoConfig
from html5video.config.profiles import ProfileRepository
from html5video.core.subprocess_utils import ProcessRunner
from html5video.exceptions import EncoderNotFoundError, UnsupportedContainerError
from html5video.executor.converters import GenericConverter, Mp4Converter
from html5video.executor.drivers import select_driver
from html5video.tools.detection import CapabilityDetector, VersionProbe

logger = logging.getLogger(__name__)

# Target container -> (video encoder keyword, audio encoder keyword)
CONTAINER_CODECS: dict[str, tuple[str, str]] = {
    "mp4": ("x264", "aac"),
    "webm": ("vpx", "vorbis"),
    "ogg": ("theora", "vorbis"),
}


class ConverterFactory:
    """Builds converters for a target container and profile."""

    def __init__(
        self,
        runner: ProcessRunner,
        config: Html5VideoConfig,
        profiles: ProfileRepository,
        detector: CapabilityDetector,
        version_probe: VersionProbe,
    ) -> None:
        """Initialize the factory.

        Args:
            runner: Runner handed to the converters for encode runs.
            config: Effective configuration, handed to the converters.
            profiles: Profile lookup.
            detector: Encoder detection.
            version_probe: Version detection for driver selection.
        """
        self.runner = runner
        self.config = config
        self.profiles = profiles
        self.detector = detector
        self.version_probe = version_probe

    def create_converter(
        self, target_format: str, profile_name: str
    ) -> GenericConverter:
        """Create a converter for the given container and profile.

        Args:
            target_format: Target container (mp4, webm, ogg).
            profile_name: Profile name.

        Returns:
            Mp4Converter for mp4, GenericConverter otherwise.

        Raises:
            ProfileNotFoundError: If the profile does not exist.
            UnsupportedContainerError: If the container has no codec mapping.
            EncoderNotFoundError: If no detected encoder matches.
        """
        profile = self.profiles.get_profile(profile_name)

        codecs = CONTAINER_CODECS.get(target_format)
        if codecs is None:
            raise UnsupportedContainerError(target_format)
        video_keyword, audio_keyword = codecs

        video_encoder = self.detector.search_encoder(video_keyword)
        if video_encoder is None:
            raise EncoderNotFoundError("video", video_keyword)
        audio_encoder = self.detector.search_encoder(audio_keyword)
        if audio_encoder is None:
            raise EncoderNotFoundError("audio", audio_keyword)

        driver = select_driver(self.version_probe.get_version())
        logger.debug(
            "Converter for %s: video=%s audio=%s driver=%s",
            target_format,
            video_encoder,
            audio_encoder,
            driver.variant.value,
        )

        converter_cls = Mp4Converter if target_format == "mp4" else GenericConverter
        return converter_cls(
            self.runner,
            driver,
            self.config,
            profile,
            video_encoder,
            audio_encoder,
        )
