"""
RSS Panel command line.

Manages the saved subscriptions, fetches feeds and suggests feed URLs from
the bundled directory, using the same services the panel runs on.
"""

import argparse
import logging
import sys
from typing import List, Optional

from rsspanel.config import Settings, load_settings
from rsspanel.models import FetchResult
from rsspanel.services.directory import FeedDirectory
from rsspanel.services.fetcher import FeedFetcher
from rsspanel.services.panel import render_article
from rsspanel.services.store import JsonFileStorage, SubscriptionStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rsspanel", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="list subscriptions")

    add = commands.add_parser("add", help="subscribe to a feed")
    add.add_argument("url")
    add.add_argument("title", nargs="?")

    remove = commands.add_parser("remove", help="unsubscribe from a feed")
    remove.add_argument("url")

    rename = commands.add_parser("rename", help="change a subscription's title")
    rename.add_argument("url")
    rename.add_argument("title")

    fetch = commands.add_parser("fetch", help="fetch a feed and list its articles")
    fetch.add_argument("url")

    commands.add_parser("refresh", help="fetch every subscription")

    show = commands.add_parser("show", help="print one article of a feed")
    show.add_argument("url")
    show.add_argument("index", type=int, help="1-based article number")

    suggest = commands.add_parser("suggest", help="suggest known feeds")
    suggest.add_argument("query")
    suggest.add_argument("-n", "--limit", type=int, default=10)
    return parser


def print_result(result: FetchResult) -> None:
    """Prints the article rows of a fetch, error rows included."""
    if result.ok and not result.articles:
        print("(no articles)")
    for i, article in enumerate(result.articles, 1):
        print(f"{i:3d}. {article.title}")
        if article.link:
            print(f"     {article.link}")


def run(args: argparse.Namespace, settings: Settings) -> int:
    store = SubscriptionStore(JsonFileStorage(settings.storage_path))
    fetcher = FeedFetcher(timeout=settings.timeout, user_agent=settings.user_agent)

    if args.command == "list":
        for sub in store.load():
            print(f"{sub.title}\t{sub.feed_url}")
        return 0

    if args.command == "add":
        if not store.add(args.url, args.title):
            print(f"Already subscribed or invalid URL: {args.url}", file=sys.stderr)
            return 1
        return 0

    if args.command == "remove":
        if not store.remove(args.url):
            print(f"Not subscribed: {args.url}", file=sys.stderr)
            return 1
        return 0

    if args.command == "rename":
        if not store.rename(args.url, args.title):
            print(f"Not subscribed: {args.url}", file=sys.stderr)
            return 1
        return 0

    if args.command == "fetch":
        result = fetcher.fetch(args.url)
        print_result(result)
        return 0 if result.ok else 1

    if args.command == "refresh":
        subscriptions = store.load()
        results = fetcher.fetch_many(
            [sub.feed_url for sub in subscriptions], max_workers=settings.max_workers
        )
        failed = 0
        for sub in subscriptions:
            result = results[sub.feed_url]
            print(f"== {sub.title}")
            print_result(result)
            failed += 0 if result.ok else 1
        return 1 if failed else 0

    if args.command == "show":
        result = fetcher.fetch(args.url)
        if not 1 <= args.index <= len(result.articles):
            print(f"No article {args.index} in {args.url}", file=sys.stderr)
            return 1
        print(render_article(result.articles[args.index - 1]))
        return 0 if result.ok else 1

    if args.command == "suggest":
        directory = FeedDirectory.for_language(settings.language)
        for entry in directory.suggest(args.query, limit=args.limit):
            print(f"{entry.title}\t{entry.feed_url}")
        return 0

    return 2


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return run(args, load_settings())


if __name__ == "__main__":
    sys.exit(main())
