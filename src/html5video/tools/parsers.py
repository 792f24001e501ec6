"""Parsers for ffmpeg text output.

Pure functions that turn captured ffmpeg output lines into structured facts.
Nothing here spawns processes, so every parser can be tested against
captured sample output.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from html5video.tools.models import MediaInfo, Version

# "ffmpeg version 4.4.2-0ubuntu0.22.04.1 ..." or "FFmpeg 0.6.5 ..."
_VERSION_PATTERN = re.compile(r"^\w+\s(version\s)?(\d+)\.(\d+)\.(\d+).*")

# " DEV.LS h264    H.264 / AVC ..." (-codecs) or "  E mp4   MP4 ..." (-formats).
# The flag class is permissive; any row whose flag column holds an E counts.
# -encoders rows list only encoders and lead with the media type instead:
# " V..... libx264  libx264 H.264 / AVC ..."
_CODEC_ROW_PATTERN = re.compile(r"^\s+([A-Z .]+)\s+([\w,]{2,})\s+(.*)$")
# Newer -codecs rows also name the implementing encoders separately:
# " DEV.LS h264  H.264 (decoders: h264 ) (encoders: libx264 libx264rgb )"
_ENCODER_LIST_PATTERN = re.compile(r"\(encoders:([^)]*)\)")

_DURATION_PATTERN = re.compile(r"Duration:\s+(\d\d):(\d\d):(\d\d\.\d+)")
_STREAM_PATTERN = re.compile(r"Stream #(\d+)")
# A leading zero rules out codec tags such as "0x31637661"
_DIMENSION_PATTERN = re.compile(r"^([1-9]\d*)x([1-9]\d*)\b")
_WORD_SPLIT_PATTERN = re.compile(r",?\s+")

ENCODER_FLAG = "E"
MEDIA_TYPE_FLAGS = ("V", "A", "S")


def parse_version(line: str) -> Version | None:
    """Extract the version triple from the first line of ffmpeg -version.

    Args:
        line: First output line.

    Returns:
        (major, minor, patch), or None if the line does not match.
    """
    match = _VERSION_PATTERN.match(line)
    if not match:
        return None
    return int(match.group(2)), int(match.group(3)), int(match.group(4))


def parse_encoders(lines: Iterable[str]) -> list[str]:
    """Extract usable encoder names from an ffmpeg codec listing.

    A -codecs or -formats row counts when its flag column holds an E. An
    -encoders row names an encoder by definition and is recognized by a flag
    column that starts with the media type (V, A or S).

    Comma-joined names are split into separate aliases, and encoder names
    listed in an "(encoders: ...)" note are added next to the codec name.
    Duplicates are kept; the result is sorted.

    Args:
        lines: Output lines.

    Returns:
        Sorted list of encoder names.
    """
    encoders: list[str] = []
    for line in lines:
        match = _CODEC_ROW_PATTERN.match(line)
        if not match:
            continue
        flags = match.group(1).strip()
        if ENCODER_FLAG not in flags and not flags.startswith(MEDIA_TYPE_FLAGS):
            continue
        name = match.group(2).strip()
        encoders.extend(alias for alias in name.split(",") if alias)

        listed = _ENCODER_LIST_PATTERN.search(match.group(3))
        if listed:
            encoders.extend(listed.group(1).split())

    return sorted(encoders)


def parse_media_info(lines: Iterable[str]) -> MediaInfo:
    """Summarize ffmpeg -i output.

    Args:
        lines: Output lines of ffmpeg -i <file>.

    Returns:
        MediaInfo with stream counts, duration and the last parsed video
        dimension.
    """
    duration: float | None = None
    video_streams = 0
    audio_streams = 0
    width: int | None = None
    height: int | None = None

    for line in lines:
        duration_match = _DURATION_PATTERN.search(line)
        if duration_match:
            hours, minutes, seconds = duration_match.groups()
            duration = int(hours) * 3600 + int(minutes) * 60 + float(seconds)
            continue

        if not _STREAM_PATTERN.search(line):
            continue

        if "Video:" in line:
            video_streams += 1
            for word in _WORD_SPLIT_PATTERN.split(line.strip()):
                dimension = _DIMENSION_PATTERN.match(word)
                if dimension:
                    width = int(dimension.group(1))
                    height = int(dimension.group(2))
        elif "Audio:" in line:
            audio_streams += 1

    return MediaInfo(
        video_streams=video_streams,
        audio_streams=audio_streams,
        duration=duration,
        width=width,
        height=height,
    )
