from __future__ import annotations

import logging
from typing import Optional

from ..config import ApiConfig, get_config
from ..errors import DecodeError
from ..listing import ListingOptions, Lister, NewPosts, TopDuration, TopPosts
from ..models import Thing, decode
from ..stream import Stream
from .auth import AuthConfig
from .transport import Request, RequestsTransport, Transport


logger = logging.getLogger(__name__)


class RedditApiClient:
    """
    Authenticated access to the Reddit API for a script app.

    - `get_raw` performs a GET with the user agent and bearer token,
    - `get` decodes the response into a Thing,
    - `stream` pages through a listing query.

    The transport is injected so tests (or callers with special network
    needs) can replace it; by default a `requests` backed one is built
    from the API config.
    """

    def __init__(
        self,
        auth: AuthConfig,
        transport: Optional[Transport] = None,
        api_config: Optional[ApiConfig] = None,
    ) -> None:
        self._auth = auth
        self._cfg = api_config or get_config().api
        self._transport = transport or RequestsTransport(
            timeout_seconds=self._cfg.timeout_seconds
        )

    @property
    def auth(self) -> AuthConfig:
        return self._auth

    def authenticate(self) -> None:
        """Obtain a token unless the stored one is still valid."""
        self._auth.authenticate(self._transport, auth_url=self._cfg.auth_url)

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def get_raw(self, url: str) -> bytes:
        request = Request(
            method="GET",
            url=url,
            headers={
                "User-Agent": self._auth.credentials.user_agent,
                "Authorization": self._auth.authorization(),
            },
        )
        return self._transport.perform(request)

    def get(self, url: str) -> Thing:
        """GET `url` and decode the body. Raises TransportError / DecodeError."""
        data = self.get_raw(url)
        try:
            return decode(data)
        except DecodeError as exc:
            raise DecodeError(f"failed to parse response from {url}: {exc}") from exc

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    def stream(self, lister: Lister) -> Stream:
        """
        A Stream over the listing described by `lister`. The lister's
        options are updated in place to hold the right `after` and `count`.
        """
        return Stream(self, lister)

    def top_posts(
        self,
        subreddit: str,
        duration: Optional[TopDuration] = None,
        limit: int = 0,
    ) -> Stream:
        lister = TopPosts(
            subreddit=subreddit,
            duration=duration,
            options=ListingOptions(limit=limit),
            api_url=self._cfg.api_url,
        )
        return self.stream(lister)

    def new_posts(self, subreddit: str, limit: int = 0) -> Stream:
        lister = NewPosts(
            subreddit=subreddit,
            options=ListingOptions(limit=limit),
            api_url=self._cfg.api_url,
        )
        return self.stream(lister)
