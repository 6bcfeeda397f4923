"""
Bundled directory of known feeds, used for URL autocomplete.

Each supported language has a ``data/feeds_<lang>.json`` file holding a JSON
array of ``{"title": ..., "feedUrl": ...}`` objects.
"""

import json
import logging
import os
from typing import List, Optional

from rsspanel.config import DEFAULT_LANGUAGE
from rsspanel.models import DirectoryEntry

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")


def load_directory(path: str) -> List[DirectoryEntry]:
    """Loads directory entries from a JSON file, skipping malformed items."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            items = json.load(f)
    except FileNotFoundError:
        logger.warning("Feed directory not found at %s.", path)
        return []
    except json.JSONDecodeError as e:
        logger.error("Invalid feed directory %s: %s", path, e)
        return []

    entries = []
    for item in items if isinstance(items, list) else []:
        if not isinstance(item, dict) or not item.get("feedUrl"):
            continue
        entries.append(DirectoryEntry(str(item.get("title") or ""), str(item["feedUrl"])))
    return entries


class FeedDirectory:
    """Suggests feed URLs from a static list."""

    def __init__(self, entries: List[DirectoryEntry]):
        self.entries = list(entries)

    @classmethod
    def for_language(
        cls, language: str = DEFAULT_LANGUAGE, data_dir: Optional[str] = None
    ) -> "FeedDirectory":
        """Loads the directory for a language, falling back to English."""
        data_dir = data_dir or DATA_DIR
        # "zh-CN" and "zh_CN" both map to feeds_zh.json
        lang = (language or DEFAULT_LANGUAGE).lower().replace("_", "-").split("-")[0]
        path = os.path.join(data_dir, f"feeds_{lang}.json")
        if not os.path.exists(path):
            logger.info("No feed directory for %r, using %r.", language, DEFAULT_LANGUAGE)
            path = os.path.join(data_dir, f"feeds_{DEFAULT_LANGUAGE}.json")
        return cls(load_directory(path))

    def suggest(self, query: str, limit: int = 10) -> List[DirectoryEntry]:
        """Returns entries whose title or URL contains the query."""
        needle = query.strip().lower()
        if not needle or limit <= 0:
            return []
        matches = []
        for entry in self.entries:
            if needle in entry.title.lower() or needle in entry.feed_url.lower():
                matches.append(entry)
                if len(matches) >= limit:
                    break
        return matches
