"""
Data models for the RSS panel.

Articles are immutable once normalized; a fetch either succeeds with a
(possibly empty) tuple of articles or fails with a tagged reason.
"""

import enum
from typing import List, NamedTuple, Tuple, TypedDict, Union


class Article(NamedTuple):
    """A normalized feed entry, free of markup."""

    title: str
    link: str
    summary: str
    content: str


class ParsedEntry(TypedDict):
    """Type definition for an entry as it comes out of the feed parser."""

    title: str
    link: str
    summary_html: str
    content_blocks: List[str]


class Subscription(NamedTuple):
    """A saved feed URL and the title the user gave it."""

    feed_url: str
    title: str


class DirectoryEntry(NamedTuple):
    """A known feed from the bundled directory."""

    title: str
    feed_url: str


class FailureKind(enum.Enum):
    """Why a fetch failed."""

    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    PARSE = "parse"


class FetchSuccess(NamedTuple):
    """Articles fetched from a feed, in feed order."""

    url: str
    articles: Tuple[Article, ...]

    @property
    def ok(self) -> bool:
        return True


class FetchFailure(NamedTuple):
    """A fetch that could not produce articles."""

    url: str
    kind: FailureKind
    message: str
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    def as_article(self) -> Article:
        """Renders the failure as a placeholder row for article lists."""
        if self.kind is FailureKind.HTTP_STATUS:
            return Article(f"HTTP Error: {self.message}", "", "", self.detail)
        return Article(f"Error: {self.message}", "", "", "")

    @property
    def articles(self) -> Tuple[Article, ...]:
        return (self.as_article(),)


FetchResult = Union[FetchSuccess, FetchFailure]
