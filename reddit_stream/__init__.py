"""
Reddit API client for script apps: typed Things and streamed listings.

Usage:

    from reddit_stream import RedditApiClient, TopDuration, load_auth_config

    client = RedditApiClient(load_auth_config())
    client.authenticate()
    stream = client.top_posts("golang", duration=TopDuration.DAY)
    for thing in stream:
        print(thing.data.title, thing.data.url)
    if stream.last_error() is not None:
        raise stream.last_error()
"""

from .clients import AuthConfig, AuthToken, Credentials, RedditApiClient, load_auth_config
from .codecs import Edited, HeaderSize
from .errors import (
    AuthError,
    ConfigError,
    DecodeError,
    RedditApiError,
    TransportError,
    URLBuildError,
)
from .listing import Lister, ListingOptions, NewPosts, TopDuration, TopPosts
from .models import (
    KINDS,
    Account,
    Comment,
    Link,
    Listing,
    Message,
    More,
    Subreddit,
    Thing,
    decode,
    decode_thing,
    encode,
    encode_thing,
)
from .stream import Stream

__all__ = [
    "AuthConfig",
    "AuthToken",
    "Credentials",
    "RedditApiClient",
    "load_auth_config",
    "Edited",
    "HeaderSize",
    "AuthError",
    "ConfigError",
    "DecodeError",
    "RedditApiError",
    "TransportError",
    "URLBuildError",
    "Lister",
    "ListingOptions",
    "NewPosts",
    "TopDuration",
    "TopPosts",
    "KINDS",
    "Account",
    "Comment",
    "Link",
    "Listing",
    "Message",
    "More",
    "Subreddit",
    "Thing",
    "decode",
    "decode_thing",
    "encode",
    "encode_thing",
    "Stream",
]
