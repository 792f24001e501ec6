"""Converters that run one ffmpeg encode.

GenericConverter encodes straight to the destination. Mp4Converter encodes
to a temporary file and then rewrites it with qt-faststart so the moov atom
sits at the front of the file and browsers can start playback while the file
is still downloading.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from html5video.config.models import Html5VideoConfig
from html5video.core.subprocess_utils import ProcessRunner
from html5video.executor.drivers import FfmpegDriver, profile_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """Result of a conversion run."""

    success: bool
    """True if every step exited with status 0."""

    message: str = ""
    """Human-readable message describing the result."""

    exit_code: int = 0
    """Exit code of the last process that ran."""

    command: tuple[str, ...] = ()
    """Full command line of the last process that ran."""

    output: tuple[str, ...] = ()
    """Captured output lines of the last process that ran."""


def _even(value: float) -> int:
    """Round to the nearest even integer (yuv420p needs even dimensions)."""
    return max(2, int(round(value / 2)) * 2)


def fit_dimensions(
    width: int | None,
    height: int | None,
    max_width: int | None,
    max_height: int | None,
) -> tuple[int | None, int | None]:
    """Scale (width, height) down to fit a bounding box, keeping aspect.

    Dimensions that already fit, or that are not both known, are returned
    unchanged.
    """
    if not width or not height:
        return width, height

    scale = 1.0
    if max_width:
        scale = min(scale, max_width / width)
    if max_height:
        scale = min(scale, max_height / height)
    if scale >= 1.0:
        return width, height
    return _even(width * scale), _even(height * scale)


class GenericConverter:
    """Runs a single ffmpeg encode for webm, ogg and other containers."""

    def __init__(
        self,
        runner: ProcessRunner,
        driver: FfmpegDriver,
        config: Html5VideoConfig,
        profile: Any,
        video_encoder: str,
        audio_encoder: str,
    ) -> None:
        self.runner = runner
        self.driver = driver
        self.config = config
        self.profile = profile
        self.video_encoder = video_encoder
        self.audio_encoder = audio_encoder

    def prepare_options(self, options: Mapping[str, Any] | None) -> dict[str, Any]:
        """Copy options, fitting width/height into the profile's bounds."""
        prepared = dict(options or {})
        width, height = fit_dimensions(
            prepared.get("width"),
            prepared.get("height"),
            profile_value(self.profile, "video", "max_width"),
            profile_value(self.profile, "video", "max_height"),
        )
        if width != prepared.get("width") or height != prepared.get("height"):
            logger.debug(
                "Scaled %sx%s to %sx%s for profile bounds",
                prepared.get("width"),
                prepared.get("height"),
                width,
                height,
            )
            prepared["width"] = width
            prepared["height"] = height
        return prepared

    def build_arguments(
        self, src: Path | str, dst: Path | str, options: Mapping[str, Any]
    ) -> list[str]:
        return self.driver.build_arguments(
            src, dst, self.video_encoder, self.audio_encoder, self.profile, options
        )

    def _run(self, binary: str, args: list[str], description: str) -> ConversionResult:
        command = (binary, *args)
        logger.info("Running %s: %s", description, " ".join(command))
        rc, lines = self.runner.run(binary, args)
        if rc != 0:
            logger.error("%s failed with exit code %d", description, rc)
            tail = lines[-1] if lines else "no output"
            return ConversionResult(
                success=False,
                message=f"{description} failed (exit code {rc}): {tail}",
                exit_code=rc,
                command=command,
                output=tuple(lines),
            )
        return ConversionResult(
            success=True,
            message=f"{description} completed",
            exit_code=rc,
            command=command,
            output=tuple(lines),
        )

    def encode(
        self, src: Path | str, dst: Path | str, options: Mapping[str, Any]
    ) -> ConversionResult:
        """Run the ffmpeg encode from src to dst."""
        args = self.build_arguments(src, dst, options)
        return self._run(self.config.tools.ffmpeg, args, "encode")

    def create(
        self,
        src: Path | str,
        dst: Path | str,
        options: Mapping[str, Any] | None = None,
    ) -> ConversionResult:
        """Convert src into dst.

        Args:
            src: Source media file.
            dst: Output file.
            options: Per-request options (width, height, audio, overwrite).

        Returns:
            ConversionResult of the encode.
        """
        return self.encode(src, dst, self.prepare_options(options))


class Mp4Converter(GenericConverter):
    """Encodes mp4 and relocates the moov atom with qt-faststart."""

    @staticmethod
    def intermediate_path(dst: Path | str) -> Path:
        """Return the temporary encode target next to dst."""
        dst = Path(dst)
        return dst.with_name(f".{dst.stem}.encoding{dst.suffix}")

    def faststart(self, src: Path | str, dst: Path | str) -> ConversionResult:
        """Rewrite src into dst with the metadata moved to the front."""
        return self._run(
            self.config.tools.qt_faststart, [str(src), str(dst)], "faststart"
        )

    def create(
        self,
        src: Path | str,
        dst: Path | str,
        options: Mapping[str, Any] | None = None,
    ) -> ConversionResult:
        """Convert src into a progressive-download mp4 at dst.

        The faststart pass only runs after a successful encode.
        """
        encoded = self.intermediate_path(dst)
        try:
            result = self.encode(src, encoded, self.prepare_options(options))
            if not result.success:
                return result
            return self.faststart(encoded, dst)
        finally:
            encoded.unlink(missing_ok=True)
