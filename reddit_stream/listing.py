from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Protocol, runtime_checkable
from urllib.parse import quote, urlencode

from .config import REDDIT_API_URL
from .errors import URLBuildError


class TopDuration(str, Enum):
    """Supported sort windows for a TopPosts request."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


@dataclass
class ListingOptions:
    """
    Size and position of a streamed listing.

    A Stream rewrites `after` and `count` between page fetches, so the same
    query object keeps producing the URL of the next page.
    See https://www.reddit.com/dev/api for what the parameters mean.
    """

    after: str = ""
    before: str = ""
    count: int = 0
    limit: int = 0
    show: str = ""

    def query_params(self) -> Dict[str, str]:
        """Non-empty parameters only; zero / "" values are left out."""
        params: Dict[str, str] = {}
        if self.after:
            params["after"] = self.after
        if self.before:
            params["before"] = self.before
        if self.count:
            params["count"] = str(self.count)
        if self.limit:
            params["limit"] = str(self.limit)
        if self.show:
            params["show"] = self.show
        return params


@runtime_checkable
class Lister(Protocol):
    """
    A listing query that a Stream can page through.

    Implementations must build their URL from the current state of the
    options returned by `listing_options()`, which is the object the Stream
    mutates.
    """

    def url(self) -> str:
        raise NotImplementedError

    def listing_options(self) -> ListingOptions:
        raise NotImplementedError


def _subreddit_url(api_url: str, subreddit: str, endpoint: str, params: Dict[str, str]) -> str:
    if not subreddit:
        raise URLBuildError(f"no subreddit given for {endpoint} listing")
    url = f"{api_url}/r/{quote(subreddit, safe='')}/{endpoint}.json"
    if params:
        url += "?" + urlencode(sorted(params.items()))
    return url


@dataclass
class TopPosts:
    """Top posts of a subreddit, usable with `RedditApiClient.stream`."""

    subreddit: str = ""
    duration: Optional[TopDuration] = None
    options: ListingOptions = field(default_factory=ListingOptions)
    api_url: str = REDDIT_API_URL

    def url(self) -> str:
        params = self.options.query_params()
        if self.duration:
            try:
                params["t"] = TopDuration(self.duration).value
            except ValueError as exc:
                raise URLBuildError(f"invalid duration {self.duration!r}") from exc
        return _subreddit_url(self.api_url, self.subreddit, "top", params)

    def listing_options(self) -> ListingOptions:
        return self.options


@dataclass
class NewPosts:
    """Newest posts of a subreddit."""

    subreddit: str = ""
    options: ListingOptions = field(default_factory=ListingOptions)
    api_url: str = REDDIT_API_URL

    def url(self) -> str:
        return _subreddit_url(self.api_url, self.subreddit, "new", self.options.query_params())

    def listing_options(self) -> ListingOptions:
        return self.options
