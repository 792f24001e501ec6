"""Conversion execution.

This package turns a profile, the detected encoders and the detected ffmpeg
version into ffmpeg invocations and runs them.
"""

from html5video.executor.converters import (
    ConversionResult,
    GenericConverter,
    Mp4Converter,
    fit_dimensions,
)
from html5video.executor.drivers import (
    DriverSyntax,
    DriverVariant,
    FfmpegDriver,
    profile_value,
    select_driver,
)
from html5video.executor.factory import CONTAINER_CODECS, ConverterFactory

__all__ = [
    # Drivers
    "DriverSyntax",
    "DriverVariant",
    "FfmpegDriver",
    "profile_value",
    "select_driver",
    # Converters
    "ConversionResult",
    "GenericConverter",
    "Mp4Converter",
    "fit_dimensions",
    # Factory
    "CONTAINER_CODECS",
    "ConverterFactory",
]
