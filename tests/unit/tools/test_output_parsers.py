"""Unit tests for ffmpeg output parsers."""

from html5video.tools.models import MediaInfo
from html5video.tools.parsers import (
    parse_encoders,
    parse_media_info,
    parse_version,
)


class TestParseVersion:
    """Tests for parse_version."""

    def test_modern_version_line(self):
        """The 'ffmpeg version X.Y.Z' form should parse."""
        line = "ffmpeg version 4.4.2-0ubuntu0.22.04.1 Copyright (c) 2000-2021"
        assert parse_version(line) == (4, 4, 2)

    def test_legacy_version_line_without_keyword(self):
        """Old builds print 'FFmpeg X.Y.Z' without the version keyword."""
        assert parse_version("FFmpeg 0.6.5, Copyright (c) 2000-2010") == (0, 6, 5)

    def test_two_component_version_does_not_match(self):
        """A version without a patch component should not parse."""
        assert parse_version("ffmpeg version 6.1 Copyright (c) 2000-2023") is None

    def test_git_build_does_not_match(self):
        """Git snapshot versions have no dotted triple."""
        line = "ffmpeg version N-109421-g9adf02247c Copyright (c) 2000-2022"
        assert parse_version(line) is None

    def test_empty_line(self):
        """Empty line should give None."""
        assert parse_version("") is None


class TestParseEncoders:
    """Tests for parse_encoders."""

    def test_encoder_row_is_collected(self):
        """A row with E in the flag column names an encoder."""
        assert parse_encoders([" DEV.LS x264    H.264 encoder"]) == ["x264"]

    def test_decoder_only_row_is_excluded(self):
        """A row without E in the flag column is skipped."""
        assert parse_encoders([" D.V.L. h264    H.264 decoder"]) == []

    def test_encoders_table_row_is_collected(self):
        """A -encoders row leading with the media type names an encoder."""
        assert parse_encoders([" V..... x264    H.264 encoder"]) == ["x264"]

    def test_decoder_row_without_media_type_is_excluded(self):
        """A row flagged only for decoding is not an encoder."""
        assert parse_encoders([" D..... h264    H.264 decoder"]) == []

    def test_encoders_table(self):
        """Audio and subtitle rows count too; the legend does not."""
        lines = [
            "Encoders:",
            " V..... = Video",
            " A..... = Audio",
            " S..... = Subtitle",
            " ------",
            " V....D libvpx               libvpx VP8 (codec vp8)",
            " A....D libvorbis            libvorbis (codec vorbis)",
            " S..... srt                  SubRip subtitle",
        ]
        assert parse_encoders(lines) == ["libvorbis", "libvpx", "srt"]

    def test_legacy_formats_row(self):
        """Rows from the old -formats table are parsed the same way."""
        lines = [
            "File formats:",
            "  E mp4             MP4 format",
            " DE mpeg            MPEG-1 System format",
            " D  mov,mp4,m4a     QuickTime/MPEG-4/Motion JPEG 2000 format",
        ]
        assert parse_encoders(lines) == ["mp4", "mpeg"]

    def test_comma_joined_aliases_are_split(self):
        """A comma-joined name yields one entry per alias."""
        assert parse_encoders([" EV    libx264,x264    libx264 H.264"]) == [
            "libx264",
            "x264",
        ]

    def test_encoders_note_is_collected(self, codecs_output):
        """Names in an (encoders: ...) note are added to the codec name."""
        encoders = parse_encoders(codecs_output)

        assert "libx264" in encoders
        assert "libvpx" in encoders
        assert "libtheora" in encoders

    def test_decoders_note_is_ignored(self, codecs_output):
        """Names in a (decoders: ...) note are not encoders."""
        assert "aac_fixed" not in parse_encoders(codecs_output)

    def test_legend_lines_are_skipped(self, codecs_output):
        """Legend and separator lines never match the row pattern."""
        encoders = parse_encoders(codecs_output)
        assert "=" not in encoders
        assert "hevc" not in encoders

    def test_result_is_sorted_with_duplicates(self, codecs_output):
        """Output is sorted and duplicates are kept."""
        encoders = parse_encoders(codecs_output)

        assert encoders == sorted(encoders)
        assert encoders.count("vorbis") == 2

    def test_no_matching_lines(self):
        """Unrelated output gives an empty list."""
        assert parse_encoders(["Hello", "", "world"]) == []


class TestParseMediaInfo:
    """Tests for parse_media_info."""

    def test_full_output(self, input_output):
        """Duration, stream counts and dimension should all be parsed."""
        info = parse_media_info(input_output)

        assert info == MediaInfo(
            video_streams=1,
            audio_streams=1,
            duration=90.5,
            width=1280,
            height=720,
        )

    def test_codec_tag_is_not_a_dimension(self, input_output):
        """Hex codec tags like 0x31637661 must not be taken as WxH."""
        info = parse_media_info(input_output)
        assert (info.width, info.height) == (1280, 720)

    def test_minimal_stream_lines(self):
        """Stream lines without leading context still count."""
        lines = [
            "Duration: 00:01:30.50, start: 0.0",
            "Stream #0.0: Video: h264, yuv420p, 1280x720, 25 fps",
            "Stream #0.1: Audio: aac, 44100 Hz, stereo",
        ]
        info = parse_media_info(lines)

        assert info.duration == 90.5
        assert info.video_streams == 1
        assert info.audio_streams == 1
        assert info.width == 1280
        assert info.height == 720

    def test_last_video_dimension_wins(self):
        """With several video streams the last parsed size is reported."""
        lines = [
            "    Stream #0:0: Video: h264, yuv420p, 1920x1080, 25 fps",
            "    Stream #0:1: Video: mjpeg, yuvj420p, 320x240, 90k tbr",
        ]
        info = parse_media_info(lines)

        assert info.video_streams == 2
        assert (info.width, info.height) == (320, 240)

    def test_silent_source(self, silent_input_output):
        """A source without audio reports zero audio streams."""
        info = parse_media_info(silent_input_output)

        assert info.audio_streams == 0
        assert not info.has_audio()
        assert info.has_video()
        assert info.duration == 10.0

    def test_hours_in_duration(self):
        """Hours and minutes are folded into seconds."""
        info = parse_media_info(["  Duration: 01:02:03.25, start: 0.000000"])
        assert info.duration == 3723.25

    def test_no_streams(self):
        """Output without stream lines gives an empty MediaInfo."""
        info = parse_media_info(["in.txt: Invalid data found when processing input"])

        assert info == MediaInfo()
        assert info.duration is None
