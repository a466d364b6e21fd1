"""
CLI entrypoint: print the top posts of a subreddit.

Usage (credentials in ~/.reddit_creds, see `load_auth_config`):

    python -m reddit_stream.run_top golang --duration day --max-items 20

This will:
- Load credentials and any stored token
- Authenticate as a script app and save the token back
- Stream the top posts and print "title url" per post
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, TextIO

from .clients import RedditApiClient, load_auth_config
from .clients.transport import Transport
from .config import AppConfig, get_config
from .errors import RedditApiError
from .listing import TopDuration
from .models import Link


def _parse_args(argv: Optional[List[str]], cfg: AppConfig) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the top posts of a subreddit.")
    parser.add_argument("subreddit")
    parser.add_argument(
        "--duration",
        choices=[d.value for d in TopDuration],
        default=TopDuration.DAY.value,
    )
    parser.add_argument("--limit", type=int, default=cfg.api.default_limit, help="page size")
    parser.add_argument("--max-items", type=int, default=0, help="stop after N posts (0 = all)")
    parser.add_argument("--config", default=cfg.api.credentials_file, help="credential file")
    return parser.parse_args(argv)


def run(
    argv: Optional[List[str]] = None,
    transport: Optional[Transport] = None,
    out: TextIO = sys.stdout,
) -> int:
    cfg = get_config()
    args = _parse_args(argv, cfg)

    auth = load_auth_config(args.config)
    client = RedditApiClient(auth, transport=transport, api_config=cfg.api)
    client.authenticate()
    auth.save(args.config)

    print(f"[top] Streaming top posts of r/{args.subreddit} ({args.duration})...", file=out)
    stream = client.top_posts(
        args.subreddit, duration=TopDuration(args.duration), limit=args.limit
    )

    printed = 0
    for thing in stream:
        if isinstance(thing.data, Link):
            print(f"{thing.data.title} {thing.data.url}", file=out)
            printed += 1
        if args.max_items and printed >= args.max_items:
            break

    error = stream.last_error()
    if error is not None:
        raise error

    print(f"[top] Printed {printed} posts.", file=out)
    return printed


def main(argv: Optional[List[str]] = None) -> None:
    try:
        run(argv)
    except RedditApiError as exc:
        print(f"[top] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
