"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, profile)
    20-29: Source file errors
    30-39: Tool/dependency errors
    40-49: Operation errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for html5video CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1

    # Validation errors (10-19)
    CONFIG_ERROR = 10
    PROFILE_NOT_FOUND = 11

    # Source file errors (20-29)
    SOURCE_NOT_READABLE = 20

    # Tool/dependency errors (30-39)
    UNSUPPORTED_CONTAINER = 30
    ENCODER_NOT_FOUND = 31

    # Operation errors (40-49)
    CONVERSION_FAILED = 40
