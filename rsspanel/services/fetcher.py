"""
Feed fetching service.

This module provides the FeedFetcher class, which downloads a feed, parses
it and normalizes its entries. Network, HTTP and parse failures never raise
out of FeedFetcher.fetch; they come back as a FetchFailure.
"""

import concurrent.futures
import logging
import threading
from typing import Callable, Dict, Iterable, Mapping, Optional

import requests

from rsspanel.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from rsspanel.errors import FeedError, HttpStatusError, TransportError
from rsspanel.models import FetchFailure, FetchResult, FetchSuccess
from rsspanel.parsers.base import FeedParser
from rsspanel.parsers.feed import SyndicationParser
from rsspanel.parsers.normalize import normalize_entries

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Fetches feeds over HTTP and returns normalized articles."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        cookies: Optional[Mapping[str, str]] = None,
        parser: Optional[FeedParser] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self.cookies = dict(cookies or {})
        self.parser: FeedParser = parser or SyndicationParser()
        self._session_factory = session_factory
        # One session (and connection pool) per worker thread
        self._local = threading.local()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            session.headers.update({"User-Agent": self.user_agent})
            if self.cookies:
                session.cookies.update(self.cookies)
            self._local.session = session
        return session

    def _download(self, url: str) -> requests.Response:
        """Issues the GET request, raising TransportError or HttpStatusError."""
        try:
            resp = self._session().get(url, timeout=self.timeout)
        except requests.RequestException as req_err:
            raise TransportError(str(req_err) or req_err.__class__.__name__) from req_err

        if not 200 <= resp.status_code < 300:
            raise HttpStatusError(resp.status_code, resp.reason or "")
        return resp

    def fetch(self, url: str) -> FetchResult:
        """Fetches, parses and normalizes a single feed."""
        try:
            resp = self._download(url)
            body = resp.content or b""
            if not body.strip():
                logger.info("Feed at %s returned an empty body.", url)
                return FetchSuccess(url, ())
            entries = self.parser.parse(body, resp.headers.get("Content-Type"))
        except HttpStatusError as http_err:
            logger.error("HTTP error fetching %s: %s", url, http_err)
            return FetchFailure(
                url, http_err.kind, str(http_err.status), http_err.reason
            )
        except FeedError as feed_err:
            logger.error("Error fetching %s: %s", url, feed_err)
            return FetchFailure(url, feed_err.kind, str(feed_err))

        articles = tuple(normalize_entries(entries))
        logger.info("Fetched %d articles from %s.", len(articles), url)
        return FetchSuccess(url, articles)

    def fetch_many(
        self, urls: Iterable[str], max_workers: Optional[int] = None
    ) -> Dict[str, FetchResult]:
        """Fetches several feeds in parallel, keyed by URL."""
        results: Dict[str, FetchResult] = {}
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_url = {executor.submit(self.fetch, url): url for url in set(urls)}
            for future in concurrent.futures.as_completed(future_to_url):
                results[future_to_url[future]] = future.result()
        return results


_DEFAULT_FETCHER = FeedFetcher()


def fetch(url: str) -> FetchResult:
    """Fetches a feed with the shared default fetcher."""
    return _DEFAULT_FETCHER.fetch(url)
