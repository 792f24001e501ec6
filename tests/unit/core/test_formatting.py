"""Tests for core formatting utilities."""

import pytest

from html5video.core.formatting import format_duration, format_version


class TestFormatVersion:
    """Tests for format_version function."""

    def test_dotted(self):
        """Version tuples are joined with dots."""
        assert format_version((4, 4, 2)) == "4.4.2"
        assert format_version((0, 10, 0)) == "0.10.0"

    def test_unknown(self):
        """A failed detection shows as unknown."""
        assert format_version(None) == "unknown"
        assert format_version(()) == "unknown"


class TestFormatDuration:
    """Tests for format_duration function."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "00:00:00.00"),
            (90.5, "00:01:30.50"),
            (3725.25, "01:02:05.25"),
            (7200, "02:00:00.00"),
        ],
    )
    def test_formats(self, seconds: float, expected: str):
        """Seconds are shown as HH:MM:SS.ss."""
        assert format_duration(seconds) == expected

    def test_unknown(self):
        """A missing duration shows as a dash."""
        assert format_duration(None) == "-"
