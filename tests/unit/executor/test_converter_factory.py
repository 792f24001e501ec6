"""Unit tests for ConverterFactory."""

import pytest

from html5video.config.profiles import ProfileNotFoundError, ProfileRepository
from html5video.exceptions import EncoderNotFoundError, UnsupportedContainerError
from html5video.executor.converters import GenericConverter, Mp4Converter
from html5video.executor.drivers import DriverVariant
from html5video.executor.factory import CONTAINER_CODECS, ConverterFactory
from html5video.tools.cache import MemoryCache
from html5video.tools.detection import CapabilityDetector, VersionProbe
from html5video.tools.models import CacheKey


def _factory(runner, config, encoders=None, version=(0, 11, 1)):
    cache = MemoryCache()
    if encoders is not None:
        cache.write(CacheKey.ENCODERS, encoders)
    cache.write(CacheKey.VERSION, list(version) if version else False)
    probe = VersionProbe(runner, cache, config.tools.ffmpeg)
    detector = CapabilityDetector(runner, cache, config.tools.ffmpeg, probe)
    profiles = ProfileRepository(config.profile_dirs)
    return ConverterFactory(runner, config, profiles, detector, probe)


class TestContainerCodecs:
    """Tests for the container codec table."""

    def test_known_containers(self):
        """mp4, webm and ogg map to their codec keywords."""
        assert CONTAINER_CODECS == {
            "mp4": ("x264", "aac"),
            "webm": ("vpx", "vorbis"),
            "ogg": ("theora", "vorbis"),
        }


class TestCreateConverter:
    """Tests for ConverterFactory.create_converter."""

    def test_mp4_selects_mp4_converter(self, make_runner, app_config):
        """mp4 with libx264 and aac available gives an Mp4Converter."""
        factory = _factory(make_runner(), app_config, encoders=["aac", "libx264"])

        converter = factory.create_converter("mp4", "default")

        assert isinstance(converter, Mp4Converter)
        assert converter.video_encoder == "libx264"
        assert converter.audio_encoder == "aac"

    def test_webm_selects_generic_converter(self, fake_runner, app_config):
        """webm uses the generic converter with detected vpx and vorbis."""
        factory = _factory(fake_runner, app_config, encoders=None)

        converter = factory.create_converter("webm", "test")

        assert type(converter) is GenericConverter
        assert converter.video_encoder == "libvpx"
        assert converter.audio_encoder == "libvorbis"
        assert converter.profile["name"] == "test"

    def test_ogg_selects_theora(self, fake_runner, app_config):
        """ogg uses the theora encoder."""
        converter = _factory(fake_runner, app_config).create_converter("ogg", "test")
        assert converter.video_encoder == "libtheora"

    def test_missing_video_encoder(self, make_runner, app_config):
        """Without an x264 match the factory fails naming the keyword."""
        factory = _factory(make_runner(), app_config, encoders=["aac", "libvpx"])

        with pytest.raises(EncoderNotFoundError) as exc_info:
            factory.create_converter("mp4", "default")

        assert exc_info.value.kind == "video"
        assert exc_info.value.keyword == "x264"
        assert "x264" in str(exc_info.value)

    def test_missing_audio_encoder(self, make_runner, app_config):
        """Without a vorbis match the factory fails on the audio side."""
        factory = _factory(make_runner(), app_config, encoders=["libvpx"])

        with pytest.raises(EncoderNotFoundError) as exc_info:
            factory.create_converter("webm", "default")

        assert exc_info.value.kind == "audio"
        assert exc_info.value.keyword == "vorbis"

    def test_unsupported_container(self, make_runner, app_config):
        """An unknown container fails before encoders are looked up."""
        runner = make_runner()
        factory = _factory(runner, app_config)

        with pytest.raises(UnsupportedContainerError, match="mkv"):
            factory.create_converter("mkv", "default")
        assert runner.calls == []

    def test_missing_profile(self, make_runner, app_config):
        """An unknown profile fails before anything else."""
        factory = _factory(make_runner(), app_config, encoders=["aac", "libx264"])

        with pytest.raises(ProfileNotFoundError, match="nope"):
            factory.create_converter("mp4", "nope")

    @pytest.mark.parametrize(
        ("version", "variant"),
        [
            ((0, 11, 1), DriverVariant.CURRENT),
            ((4, 4, 2), DriverVariant.V0_6),
            ((0, 10, 2), DriverVariant.V0_10),
            ((0, 8, 5), DriverVariant.V0_8),
            (None, DriverVariant.V0_6),
        ],
    )
    def test_driver_follows_version(self, make_runner, app_config, version, variant):
        """The converter gets the driver for the detected version."""
        factory = _factory(
            make_runner(), app_config, encoders=["aac", "libx264"], version=version
        )
        converter = factory.create_converter("mp4", "default")
        assert converter.driver.variant is variant
