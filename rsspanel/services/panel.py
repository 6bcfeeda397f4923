"""
Headless controller behind the feed panel.

FeedPanel owns the mutable view state: the current selection and the
article list fetched for each URL. Fetches run on a worker pool and their
results are handed to ``dispatch``, the host's hook for running code on its
UI thread. A result that arrives after the user selected another feed is
dropped.
"""

import concurrent.futures
import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

from rsspanel.models import Article, FetchResult, Subscription
from rsspanel.services.fetcher import FeedFetcher
from rsspanel.services.store import SubscriptionStore

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]
UpdateListener = Callable[[str, FetchResult], None]


def _run_inline(task: Callable[[], None]) -> None:
    task()


def render_article(article: Article) -> str:
    """Formats an article the way the content viewer shows it."""
    parts = [article.title, article.link, article.summary, article.content]
    return "\n\n".join(part for part in parts if part)


class FeedPanel:
    """Keeps the article lists shown for each subscription."""

    def __init__(
        self,
        store: SubscriptionStore,
        fetcher: Optional[FeedFetcher] = None,
        dispatch: Optional[Dispatch] = None,
        on_update: Optional[UpdateListener] = None,
        max_workers: Optional[int] = None,
    ):
        self.store = store
        self.fetcher = fetcher or FeedFetcher()
        self.dispatch: Dispatch = dispatch or _run_inline
        self.on_update = on_update
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="rsspanel-fetch"
        )
        self._lock = threading.Lock()
        self._results: Dict[str, FetchResult] = {}
        self._selected: Optional[str] = None
        self._pending: Optional[concurrent.futures.Future] = None
        self._generation = 0

    def __enter__(self) -> "FeedPanel":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def selected(self) -> Optional[str]:
        return self._selected

    def subscriptions(self) -> List[Subscription]:
        return self.store.load()

    def articles(self, url: str) -> Tuple[Article, ...]:
        """Returns the rows to show for a URL, error rows included."""
        with self._lock:
            result = self._results.get(url)
        return result.articles if result is not None else ()

    def result(self, url: str) -> Optional[FetchResult]:
        with self._lock:
            return self._results.get(url)

    def select(self, url: str) -> concurrent.futures.Future:
        """Makes a feed current and fetches it in the background."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._selected = url
            if self._pending is not None and self._pending.cancel():
                logger.debug("Cancelled queued fetch superseded by %s.", url)
            future = self._executor.submit(self.fetcher.fetch, url)
            self._pending = future
        future.add_done_callback(
            lambda done: self._deliver(done, url, generation)
        )
        return future

    def refresh_all(self) -> List[concurrent.futures.Future]:
        """Refetches every subscription; each list is replaced when it arrives."""
        futures = []
        for sub in self.store.load():
            future = self._executor.submit(self.fetcher.fetch, sub.feed_url)
            future.add_done_callback(
                lambda done, url=sub.feed_url: self._deliver(done, url, None)
            )
            futures.append(future)
        logger.info("Refreshing %d subscriptions.", len(futures))
        return futures

    def subscribe(self, url: str, title: Optional[str] = None) -> bool:
        """Saves a new subscription and selects it."""
        if not self.store.add(url, title):
            return False
        self.select(url.strip())
        return True

    def unsubscribe(self, url: str) -> bool:
        """Removes a subscription and forgets its articles."""
        removed = self.store.remove(url)
        with self._lock:
            self._results.pop(url, None)
            if self._selected == url:
                # Any fetch still in flight for it becomes stale
                self._generation += 1
                self._selected = None
        return removed

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _deliver(
        self,
        future: concurrent.futures.Future,
        url: str,
        generation: Optional[int],
    ) -> None:
        if future.cancelled():
            return
        result = future.result()
        self.dispatch(lambda: self._apply(url, generation, result))

    def _apply(self, url: str, generation: Optional[int], result: FetchResult) -> None:
        # Refresh results only count while the feed is still subscribed
        if generation is None and self.store.find(url) is None:
            logger.debug("Discarding result for removed subscription %s.", url)
            return
        with self._lock:
            if generation is not None and generation != self._generation:
                logger.debug("Discarding late result for %s.", url)
                return
            self._results[url] = result
        if self.on_update is not None:
            self.on_update(url, result)
