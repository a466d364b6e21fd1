from __future__ import annotations

import os
from dataclasses import dataclass, field


# URL used to obtain an authentication token.
REDDIT_AUTH_URL = "https://www.reddit.com/api/v1/access_token"

# Base URL used to make API calls.
REDDIT_API_URL = "https://oauth.reddit.com"

# Default file used to store API credentials and the current token.
DEFAULT_CONFIG_FILE = "~/.reddit_creds"


# ---------- API configuration ----------


@dataclass
class ApiConfig:
    """
    Endpoints and HTTP settings for talking to the Reddit API.
    """

    auth_url: str = REDDIT_AUTH_URL
    api_url: str = REDDIT_API_URL
    credentials_file: str = DEFAULT_CONFIG_FILE
    timeout_seconds: float = 10.0  # HTTP timeout handed to the transport
    default_limit: int = 25  # page size used by the CLI when none is given


# ---------- Top-level application configuration ----------


@dataclass
class AppConfig:
    api: ApiConfig = field(default_factory=ApiConfig)


def get_config() -> AppConfig:
    """
    Main entrypoint to get the full application config.

    Environment overrides:
    - REDDIT_CREDENTIALS_FILE
    - REDDIT_API_URL
    - REDDIT_TIMEOUT_SECONDS

    Usage:
        from reddit_stream.config import get_config
        cfg = get_config()
        cfg.api.credentials_file
    """
    cfg = AppConfig()

    credentials_file = os.getenv("REDDIT_CREDENTIALS_FILE")
    if credentials_file:
        cfg.api.credentials_file = credentials_file

    api_url = os.getenv("REDDIT_API_URL")
    if api_url:
        cfg.api.api_url = api_url.rstrip("/")

    timeout = os.getenv("REDDIT_TIMEOUT_SECONDS")
    if timeout:
        cfg.api.timeout_seconds = float(timeout)

    return cfg
