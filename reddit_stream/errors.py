from __future__ import annotations

from typing import Optional


class RedditApiError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(RedditApiError):
    """
    A JSON payload did not match the expected Thing / Listing shape.

    Raised for malformed JSON, unknown `kind` discriminators, wrong array
    lengths and fields holding a value of the wrong JSON type.
    """


class TransportError(RedditApiError):
    """
    An HTTP request failed or returned a non-success status.

    `url` is always the URL that was being requested.
    """

    def __init__(self, url: str, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class URLBuildError(RedditApiError):
    """A listing query could not produce a URL (e.g. no subreddit given)."""


class AuthError(RedditApiError):
    """The token endpoint rejected the request or returned an incomplete token."""


class ConfigError(RedditApiError):
    """The credential file could not be read, parsed or validated."""
