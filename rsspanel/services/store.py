"""
Subscription storage.

This module provides the SubscriptionStore class, which keeps the user's
feed list in the host's key/value storage as ``feedUrl|displayTitle`` lines.
"""

import json
import logging
import os
import threading
from typing import Dict, List, Optional, Protocol

from rsspanel.models import Subscription

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_KEY = "rsspanel.subscriptions"


class KeyValueStorage(Protocol):
    """String key/value storage provided by the host."""

    def get_value(self, key: str, default: str = "") -> str:
        """Returns the stored value or default."""

    def set_value(self, key: str, value: str) -> None:
        """Stores a value."""


class MemoryStorage(KeyValueStorage):
    """Keeps values in a dict, for tests and throwaway sessions."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(values or {})

    def get_value(self, key: str, default: str = "") -> str:
        return self.values.get(key, default)

    def set_value(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileStorage(KeyValueStorage):
    """Keeps values in a JSON object on disk."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Could not read storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Storage file %s does not hold an object.", self.path)
            return {}
        return data

    def get_value(self, key: str, default: str = "") -> str:
        with self._lock:
            value = self._read().get(key, default)
        return value if isinstance(value, str) else default

    def set_value(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)


def parse_subscriptions(raw: str) -> List[Subscription]:
    """Reads the stored form back into subscriptions.

    Lines without a title use the URL as title. A single line holding
    comma-separated URLs, as older versions saved, is also understood.
    """
    subscriptions: List[Subscription] = []
    seen = set()
    for line in raw.splitlines():
        line = line.strip()
        if not line:
            continue
        if "|" in line:
            url, title = line.split("|", 1)
            pairs = [(url.strip(), title.strip())]
        else:
            pairs = [(url.strip(), "") for url in line.split(",")]
        for url, title in pairs:
            if not url or url in seen:
                continue
            seen.add(url)
            subscriptions.append(Subscription(url, title or url))
    return subscriptions


def serialize_subscriptions(subscriptions: List[Subscription]) -> str:
    """Writes subscriptions as one ``url|title`` line each."""
    lines = []
    for sub in subscriptions:
        title = " ".join(sub.title.splitlines())
        lines.append(f"{sub.feed_url}|{title}")
    return "\n".join(lines)


class SubscriptionStore:
    """Loads and saves the user's subscriptions."""

    def __init__(self, storage: KeyValueStorage, key: str = SUBSCRIPTIONS_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> List[Subscription]:
        """Returns the saved subscriptions in the order they were added."""
        return parse_subscriptions(self.storage.get_value(self.key, ""))

    def save(self, subscriptions: List[Subscription]) -> None:
        """Replaces the saved subscriptions."""
        self.storage.set_value(self.key, serialize_subscriptions(subscriptions))
        logger.debug("Saved %d subscriptions.", len(subscriptions))

    def find(self, url: str) -> Optional[Subscription]:
        for sub in self.load():
            if sub.feed_url == url:
                return sub
        return None

    def add(self, url: str, title: Optional[str] = None) -> bool:
        """Adds a subscription unless the URL is blank or already saved."""
        url = url.strip()
        if not url:
            return False
        subscriptions = self.load()
        if any(sub.feed_url == url for sub in subscriptions):
            return False
        subscriptions.append(Subscription(url, (title or "").strip() or url))
        self.save(subscriptions)
        logger.info("Subscribed to %s.", url)
        return True

    def remove(self, url: str) -> bool:
        subscriptions = self.load()
        remaining = [sub for sub in subscriptions if sub.feed_url != url]
        if len(remaining) == len(subscriptions):
            return False
        self.save(remaining)
        logger.info("Unsubscribed from %s.", url)
        return True

    def rename(self, url: str, title: str) -> bool:
        """Changes the display title of a subscription."""
        subscriptions = self.load()
        renamed = False
        for i, sub in enumerate(subscriptions):
            if sub.feed_url == url:
                subscriptions[i] = sub._replace(title=title.strip() or url)
                renamed = True
        if renamed:
            self.save(subscriptions)
        return renamed
