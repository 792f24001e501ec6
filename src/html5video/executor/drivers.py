"""ffmpeg command-line drivers.

ffmpeg changed its option syntax several times (codec flags, bitrate flags,
x264 presets, scaling). Each supported generation is one DriverVariant; a
single FfmpegDriver builds arguments from the variant's DriverSyntax entry.
The variant is chosen once from the detected version.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from html5video.tools.detection import is_version_greater_or_equal
from html5video.tools.models import Version

logger = logging.getLogger(__name__)


class DriverVariant(Enum):
    """Supported ffmpeg generations."""

    CURRENT = "current"  # 0.11 and later
    V0_10 = "0.10"  # 0.9 - 0.10
    V0_8 = "0.8"  # 0.8
    V0_6 = "0.6"  # 0.7 and earlier


@dataclass(frozen=True)
class DriverSyntax:
    """Option spelling of one ffmpeg generation."""

    video_codec_flag: str
    audio_codec_flag: str
    video_bitrate_flag: str
    audio_bitrate_flag: str
    named_presets: bool  # -preset/-profile:v instead of -vpre preset files
    scale_filter: bool  # -vf scale=W:H instead of -s WxH
    scale_placeholder: str  # Keeps aspect for the missing dimension


_SYNTAX: dict[DriverVariant, DriverSyntax] = {
    DriverVariant.CURRENT: DriverSyntax(
        video_codec_flag="-c:v",
        audio_codec_flag="-c:a",
        video_bitrate_flag="-b:v",
        audio_bitrate_flag="-b:a",
        named_presets=True,
        scale_filter=True,
        scale_placeholder="-2",
    ),
    DriverVariant.V0_10: DriverSyntax(
        video_codec_flag="-vcodec",
        audio_codec_flag="-acodec",
        video_bitrate_flag="-b:v",
        audio_bitrate_flag="-b:a",
        named_presets=True,
        scale_filter=True,
        scale_placeholder="-2",
    ),
    DriverVariant.V0_8: DriverSyntax(
        video_codec_flag="-vcodec",
        audio_codec_flag="-acodec",
        video_bitrate_flag="-b",
        audio_bitrate_flag="-ab",
        named_presets=False,
        scale_filter=True,
        scale_placeholder="-1",
    ),
    DriverVariant.V0_6: DriverSyntax(
        video_codec_flag="-vcodec",
        audio_codec_flag="-acodec",
        video_bitrate_flag="-b",
        audio_bitrate_flag="-ab",
        named_presets=False,
        scale_filter=False,
        scale_placeholder="",
    ),
}

# Evaluated in order, first match wins
_VERSION_BANDS: tuple[tuple[Version, DriverVariant], ...] = (
    ((0, 11, 0), DriverVariant.CURRENT),
    ((0, 9, 0), DriverVariant.V0_10),
    ((0, 8, 0), DriverVariant.V0_8),
)


def profile_value(profile: Any, *keys: str) -> Any:
    """Walk nested mappings, returning None where the path ends early."""
    value = profile
    for key in keys:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


@dataclass(frozen=True)
class FfmpegDriver:
    """Builds ffmpeg arguments for one ffmpeg generation."""

    variant: DriverVariant

    @property
    def syntax(self) -> DriverSyntax:
        return _SYNTAX[self.variant]

    def build_arguments(
        self,
        src: Path | str,
        dst: Path | str,
        video_encoder: str,
        audio_encoder: str,
        profile: Any,
        options: Mapping[str, Any],
    ) -> list[str]:
        """Build the argument list for one encode.

        Args:
            src: Source media file.
            dst: Output file; the container follows its extension.
            video_encoder: Detected video encoder name.
            audio_encoder: Detected audio encoder name.
            profile: Decoded profile (only well-known keys are read).
            options: Per-request options: width, height, audio, overwrite.

        Returns:
            Arguments to pass after the ffmpeg binary.
        """
        args: list[str] = []
        if options.get("overwrite", True):
            args.append("-y")
        args.extend(["-i", str(src)])

        args.extend(self._video_args(video_encoder, profile))
        args.extend(self._scale_args(options.get("width"), options.get("height")))

        if options.get("audio", True) is False:
            args.append("-an")
        else:
            args.extend(self._audio_args(audio_encoder, profile))

        threads = profile_value(profile, "threads")
        if threads is not None:
            args.extend(["-threads", str(threads)])

        args.append(str(dst))
        return args

    def _video_args(self, encoder: str, profile: Any) -> list[str]:
        syntax = self.syntax
        args = [syntax.video_codec_flag, encoder]

        if "x264" in encoder:
            preset = profile_value(profile, "video", "preset")
            x264_profile = profile_value(profile, "video", "profile")
            if syntax.named_presets:
                if preset:
                    args.extend(["-preset", str(preset)])
                if x264_profile:
                    args.extend(["-profile:v", str(x264_profile)])
            else:
                if preset:
                    args.extend(["-vpre", str(preset)])
                if x264_profile:
                    args.extend(["-vpre", str(x264_profile)])
            level = profile_value(profile, "video", "level")
            if level:
                args.extend(["-level", str(level)])
            args.extend(["-pix_fmt", "yuv420p"])

        bitrate = profile_value(profile, "video", "bitrate")
        if bitrate:
            args.extend([syntax.video_bitrate_flag, str(bitrate)])
        framerate = profile_value(profile, "video", "framerate")
        if framerate:
            args.extend(["-r", str(framerate)])
        keyint = profile_value(profile, "video", "keyint")
        if keyint:
            args.extend(["-g", str(keyint)])
        return args

    def _scale_args(self, width: Any, height: Any) -> list[str]:
        if not width and not height:
            return []

        syntax = self.syntax
        if not syntax.scale_filter:
            # -s needs both dimensions
            if width and height:
                return ["-s", f"{width}x{height}"]
            logger.debug("Skipping scaling, %s needs width and height", self.variant)
            return []

        w = str(width) if width else syntax.scale_placeholder
        h = str(height) if height else syntax.scale_placeholder
        return ["-vf", f"scale={w}:{h}"]

    def _audio_args(self, encoder: str, profile: Any) -> list[str]:
        syntax = self.syntax
        args = [syntax.audio_codec_flag, encoder]

        bitrate = profile_value(profile, "audio", "bitrate")
        if bitrate:
            args.extend([syntax.audio_bitrate_flag, str(bitrate)])
        samplerate = profile_value(profile, "audio", "samplerate")
        if samplerate:
            args.extend(["-ar", str(samplerate)])
        channels = profile_value(profile, "audio", "channels")
        if channels:
            args.extend(["-ac", str(channels)])
        if encoder == "aac":
            # The native aac encoder was experimental before ffmpeg 2.8
            args.extend(["-strict", "experimental"])
        return args


def select_driver(version: Version | None) -> FfmpegDriver:
    """Select the driver for the detected ffmpeg version.

    Args:
        version: Detected version, or None when detection failed.

    Returns:
        FfmpegDriver for the newest matching band. Unknown versions get the
        most conservative (0.6) driver.
    """
    if version is None:
        logger.warning("ffmpeg version unknown, using legacy 0.6 driver")
        return FfmpegDriver(DriverVariant.V0_6)

    for minimum, variant in _VERSION_BANDS:
        if is_version_greater_or_equal(version, minimum):
            return FfmpegDriver(variant)
    return FfmpegDriver(DriverVariant.V0_6)
