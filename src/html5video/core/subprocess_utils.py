"""Subprocess utilities for external tool invocation.

This module provides the subprocess wrapper used for every ffmpeg and
qt-faststart invocation, and the ProcessRunner protocol the rest of the
codebase depends on so tests can substitute canned tool output.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for ffmpeg invocation
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


def run_command(
    args: Sequence[str | Path],
    timeout: float | None = None,
    errors: str = "replace",
) -> tuple[int, list[str]]:
    """Run external command and collect its combined output.

    stderr is merged into stdout because ffmpeg writes its banner, stream
    information and codec tables to stderr.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds (None waits forever).
        errors: Error handling mode for text decoding (default "replace").

    Returns:
        Tuple of (returncode, output_lines). A binary that cannot be started
        yields (-1, []) after the OSError is logged.

    Raises:
        subprocess.TimeoutExpired: If command times out. subprocess.run()
            kills the child before raising.

    Example:
        >>> rc, lines = run_command(["ffmpeg", "-version"])
        >>> if rc == 0:
        ...     print(lines[0])
    """
    str_args = [str(arg) for arg in args]
    command_name = str_args[0].split("/")[-1] if str_args else "unknown"

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()

    try:
        result = subprocess.run(  # nosec B603 - caller validates args
            str_args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors=errors,
            timeout=timeout,
        )
    except OSError as e:
        logger.warning(
            "Could not execute %s: %s",
            str_args[0] if str_args else "",
            e,
            extra={"command": command_name},
        )
        return -1, []
    except subprocess.TimeoutExpired:
        elapsed = time.monotonic() - start_time
        logger.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        raise

    elapsed = time.monotonic() - start_time
    logger.debug(
        "Command completed",
        extra={
            "command": command_name,
            "elapsed_seconds": round(elapsed, 3),
            "returncode": result.returncode,
        },
    )

    return result.returncode, (result.stdout or "").splitlines()


class ProcessRunner(Protocol):
    """Protocol for spawning the external tools.

    Implementations run the binary to completion and return the exit code
    together with the ordered output lines.
    """

    def run(self, binary: str, args: Sequence[str]) -> tuple[int, list[str]]:
        """Run binary with args and wait for it to exit.

        Args:
            binary: Executable name or path.
            args: Arguments passed after the binary.

        Returns:
            Tuple of (exit_code, output_lines).
        """
        ...


class SubprocessRunner:
    """ProcessRunner backed by subprocess.run()."""

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the runner.

        Args:
            timeout: Timeout in seconds for every invocation. None waits
                until the process exits.
        """
        self.timeout = timeout

    def run(self, binary: str, args: Sequence[str]) -> tuple[int, list[str]]:
        """Run binary with args; a timeout yields (-1, [])."""
        try:
            return run_command([binary, *args], timeout=self.timeout)
        except subprocess.TimeoutExpired:
            return -1, []
