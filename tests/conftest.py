"""Shared test fixtures for html5video."""

import json
from collections.abc import Sequence
from pathlib import Path

import pytest

from html5video.config.models import CacheConfig, Html5VideoConfig
from html5video.service import Html5Video
from html5video.tools.cache import MemoryCache

FFMPEG_VERSION_OUTPUT = [
    "ffmpeg version 0.11.1 Copyright (c) 2000-2012 the FFmpeg developers",
    "  built on Jun 12 2012 14:26:07 with gcc 4.6.3",
    "libavutil      51. 54.100 / 51. 54.100",
]

FFMPEG_CODECS_OUTPUT = [
    "Codecs:",
    " D..... = Decoding supported",
    " .E.... = Encoding supported",
    " ..V... = Video codec",
    " -------",
    " DEA.L. aac                  AAC (Advanced Audio Coding) "
    "(decoders: aac aac_fixed )",
    " DEV.LS h264                 H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10 "
    "(encoders: libx264 libx264rgb )",
    " D.V.L. hevc                 H.265 / HEVC (High Efficiency Video Coding)",
    " DEV.L. theora               Theora (encoders: libtheora )",
    " DEA.L. vorbis               Vorbis (decoders: vorbis libvorbis ) "
    "(encoders: vorbis libvorbis )",
    " DEV.L. vp8                  On2 VP8 (decoders: vp8 libvpx ) "
    "(encoders: libvpx )",
]

FFMPEG_INPUT_OUTPUT = [
    "Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'in.mov':",
    "  Metadata:",
    "    major_brand     : qt",
    "  Duration: 00:01:30.50, start: 0.000000, bitrate: 2500 kb/s",
    "    Stream #0:0(und): Video: h264 (High) (avc1 / 0x31637661), yuv420p, "
    "1280x720 [SAR 1:1 DAR 16:9], 2300 kb/s, 29.97 fps, 29.97 tbr (default)",
    "    Stream #0:1(und): Audio: aac (LC) (mp4a / 0x6134706D), 44100 Hz, "
    "stereo, fltp, 128 kb/s (default)",
    "At least one output file must be specified",
]

FFMPEG_SILENT_INPUT_OUTPUT = [
    "Input #0, avi, from 'silent.avi':",
    "  Duration: 00:00:10.00, start: 0.000000, bitrate: 900 kb/s",
    "    Stream #0:0: Video: mpeg4 (Simple Profile) (XVID / 0x44495658), "
    "yuv420p, 640x480 [SAR 1:1 DAR 4:3], 25 fps, 25 tbr",
    "At least one output file must be specified",
]

TEST_PROFILE = {
    "name": "test",
    "description": "Profile for tests",
    "video": {"bitrate": "800k", "preset": "fast", "profile": "main"},
    "audio": {"bitrate": "96k", "samplerate": 44100, "channels": 2},
}


class FakeRunner:
    """ProcessRunner that returns canned output instead of spawning tools.

    Responses are looked up by the first argument ("-version", "-codecs",
    "-i", "-y" for encodes) and then by binary name. Every call is recorded.
    """

    def __init__(
        self,
        responses: dict[str, tuple[int, list[str]]] | None = None,
        default: tuple[int, list[str]] = (0, []),
    ) -> None:
        self.responses = dict(responses or {})
        self.default = default
        self.calls: list[tuple[str, list[str]]] = []

    def run(self, binary: str, args: Sequence[str]) -> tuple[int, list[str]]:
        self.calls.append((binary, list(args)))
        if args and args[0] in self.responses:
            return self.responses[args[0]]
        return self.responses.get(binary, self.default)

    def calls_with(self, first_arg: str) -> list[tuple[str, list[str]]]:
        """Return the recorded calls whose first argument is first_arg."""
        return [call for call in self.calls if call[1][:1] == [first_arg]]


@pytest.fixture
def version_output() -> list[str]:
    """ffmpeg -version output of ffmpeg 0.11.1."""
    return list(FFMPEG_VERSION_OUTPUT)


@pytest.fixture
def codecs_output() -> list[str]:
    """ffmpeg -codecs output in the modern table layout."""
    return list(FFMPEG_CODECS_OUTPUT)


@pytest.fixture
def input_output() -> list[str]:
    """ffmpeg -i output of a 1280x720 file with one audio stream."""
    return list(FFMPEG_INPUT_OUTPUT)


@pytest.fixture
def silent_input_output() -> list[str]:
    """ffmpeg -i output of a 640x480 file without audio."""
    return list(FFMPEG_SILENT_INPUT_OUTPUT)


@pytest.fixture
def make_runner():
    """Factory for FakeRunner instances with custom responses."""
    return FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    """FakeRunner answering like an ffmpeg 0.11 with x264, vpx and vorbis."""
    return FakeRunner(
        {
            "-version": (0, list(FFMPEG_VERSION_OUTPUT)),
            "-codecs": (0, list(FFMPEG_CODECS_OUTPUT)),
            "-i": (1, list(FFMPEG_INPUT_OUTPUT)),
        }
    )


@pytest.fixture
def memory_cache() -> MemoryCache:
    """Empty in-process capability cache."""
    return MemoryCache()


@pytest.fixture
def profile_dir(tmp_path: Path) -> Path:
    """Profile directory holding a single 'test' profile."""
    directory = tmp_path / "profiles"
    directory.mkdir()
    (directory / "test.profile").write_text(json.dumps(TEST_PROFILE))
    return directory


@pytest.fixture
def app_config(tmp_path: Path, profile_dir: Path) -> Html5VideoConfig:
    """Configuration with an isolated cache dir and the test profile dir."""
    return Html5VideoConfig(
        cache=CacheConfig(directory=tmp_path / "cache"),
        profile_dirs=[profile_dir],
    )


@pytest.fixture
def service(
    app_config: Html5VideoConfig, memory_cache: MemoryCache, fake_runner: FakeRunner
) -> Html5Video:
    """Html5Video wired to the fake runner and an in-memory cache."""
    return Html5Video(config=app_config, cache=memory_cache, runner=fake_runner)


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """Readable (fake) source media file."""
    path = tmp_path / "in.mov"
    path.write_bytes(b"\x00\x00\x00\x18ftypqt  ")
    return path
