"""
Exceptions raised along the fetch pipeline.

They never escape FeedFetcher.fetch; the fetcher turns them into a
FetchFailure of the matching kind.
"""

from rsspanel.models import FailureKind


class FeedError(Exception):
    """Base class for fetch pipeline errors."""

    kind: FailureKind = FailureKind.TRANSPORT


class TransportError(FeedError):
    """DNS, connection, timeout or TLS failure."""

    kind = FailureKind.TRANSPORT


class HttpStatusError(FeedError):
    """The server answered with a non-2xx status."""

    kind = FailureKind.HTTP_STATUS

    def __init__(self, status: int, reason: str = ""):
        super().__init__(f"{status} {reason}".strip())
        self.status = status
        self.reason = reason


class ParseError(FeedError):
    """The body is not a feed that can be parsed."""

    kind = FailureKind.PARSE
