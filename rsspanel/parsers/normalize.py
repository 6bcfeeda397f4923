"""Turns parsed feed entries into clean Article records."""

from typing import Iterable, List

from rsspanel.models import Article, ParsedEntry
from rsspanel.parsers.markup import strip_markup

DEFAULT_TITLE = "(untitled)"


def normalize_entry(entry: ParsedEntry) -> Article:
    """Strips markup from every text field of a single entry."""
    blocks = entry.get("content_blocks") or []
    return Article(
        title=strip_markup(entry.get("title")) or DEFAULT_TITLE,
        link=(entry.get("link") or "").strip(),
        summary=strip_markup(entry.get("summary_html")),
        content=strip_markup(" ".join(blocks)),
    )


def normalize_entries(entries: Iterable[ParsedEntry]) -> List[Article]:
    """Normalizes entries, keeping their order."""
    return [normalize_entry(entry) for entry in entries]
