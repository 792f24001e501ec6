"""Exception hierarchy for html5video.

Hard failures (missing source, unknown container, missing encoder, missing
profile) are raised to the caller. Tool detection problems are never raised;
they surface as empty or None results so callers can degrade gracefully.
"""


class Html5VideoError(Exception):
    """Base class for all html5video errors."""

    pass


class ConfigError(Html5VideoError):
    """Configuration is invalid or could not be loaded."""

    pass


class UnreadableSourceError(Html5VideoError):
    """Source media file is missing or not readable."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Source file '{path}' is not readable")


class UnsupportedContainerError(Html5VideoError):
    """Target container format has no codec mapping."""

    def __init__(self, target_format: str) -> None:
        self.target_format = target_format
        super().__init__(f"Unsupported target video container: {target_format}")


class EncoderNotFoundError(Html5VideoError):
    """No detected encoder matches the codec required by the container."""

    def __init__(self, kind: str, keyword: str) -> None:
        self.kind = kind
        self.keyword = keyword
        super().__init__(f"{kind.capitalize()} encoder not found for {keyword}")
