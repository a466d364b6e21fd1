from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Optional

from .errors import DecodeError, RedditApiError, URLBuildError
from .models import Listing, Thing

if TYPE_CHECKING:
    # Typed only to avoid import cycles at runtime
    from .clients.reddit_client import RedditApiClient
    from .listing import Lister


logger = logging.getLogger(__name__)


class Stream:
    """
    A forward-only cursor over the Things of a paginated Listing.

    Only the current page is held in memory. When it runs out, the next page
    is fetched through the client using the URL the lister builds after its
    `after` and `count` options have been moved forward.

    Usage:
        stream = client.stream(TopPosts(subreddit="golang"))
        while stream.advance():
            link = stream.current().data
        if stream.last_error() is not None:
            ...

    Always check `last_error()` once `advance()` returns False: running out
    of items and failing both end iteration.
    """

    def __init__(self, client: "RedditApiClient", lister: "Lister") -> None:
        self._client = client
        self._lister = lister
        self._listing = Listing()
        self._index = -1  # -1 until the first page is fetched
        self._exhausted = False
        self._error: Optional[RedditApiError] = None

    def last_error(self) -> Optional[RedditApiError]:
        """The error that stopped the stream, or None."""
        return self._error

    def _index_valid(self) -> bool:
        return 0 <= self._index < len(self._listing.children)

    def advance(self) -> bool:
        """
        Move to the next Thing. Returns True iff one is available.

        Served from the cached page when possible. Otherwise exactly one
        request is made, unless the last page had no continuation token or
        a previous fetch came back empty. After an error every call returns
        False without touching the network again.
        """
        if self._error is not None or self._exhausted:
            return False
        if self._index_valid():
            self._index += 1
        if self._index_valid():
            return True
        if self._listing.after == "" and self._index != -1:
            return False
        return self._fetch_next_page()

    def _fetch_next_page(self) -> bool:
        options = self._lister.listing_options()
        options.after = self._listing.after

        try:
            url = self._lister.url()
        except URLBuildError as exc:
            self._error = exc
            return False
        except (TypeError, ValueError) as exc:
            self._error = URLBuildError(f"failed to build listing URL: {exc}")
            return False

        logger.debug("Fetching listing page %s", url)
        try:
            thing = self._client.get(url)
        except RedditApiError as exc:
            logger.warning("Listing fetch failed for %s: %s", url, exc)
            self._error = exc
            return False

        if not isinstance(thing.data, Listing):
            self._error = DecodeError(
                f"expected a Listing from {url}, got kind {thing.kind!r}"
            )
            return False

        self._listing = thing.data
        self._index = 0
        options.count += len(self._listing.children)

        if not self._listing.children:
            # Emptiness is only known after asking for the page.
            self._exhausted = True
            return False
        return True

    def current(self) -> Thing:
        """
        The Thing at the cursor, or an empty Thing if the stream has not
        started, has finished or has failed.
        """
        if self._error is None and self._index_valid():
            return self._listing.children[self._index]
        return Thing()

    def __iter__(self) -> Iterator[Thing]:
        while self.advance():
            yield self.current()
