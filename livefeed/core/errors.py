"""Exception hierarchy shared by the livefeed jobs."""

from __future__ import annotations


class LivefeedError(RuntimeError):
    """Base class for livefeed failures."""


class ConfigurationError(LivefeedError):
    """Raised when required configuration (such as the API key) is missing."""


class FetchError(LivefeedError):
    """Raised when the channel directory cannot be retrieved."""


class YouTubeAPIError(LivefeedError):
    """Raised when the YouTube Data API answers with an error payload."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
