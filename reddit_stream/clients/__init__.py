"""
Client package for talking to the Reddit API.

This package exposes:
- Transport / RequestsTransport: the HTTP seam and its `requests` backed default.
- Credentials / AuthToken / AuthConfig: script app credentials and token store.
- RedditApiClient: authenticated GET, decoding and listing streams.
"""

from .auth import AuthConfig, AuthToken, Credentials, load_auth_config, request_token
from .reddit_client import RedditApiClient
from .transport import Request, RequestsTransport, Transport

__all__ = [
    "AuthConfig",
    "AuthToken",
    "Credentials",
    "load_auth_config",
    "request_token",
    "RedditApiClient",
    "Request",
    "RequestsTransport",
    "Transport",
]
