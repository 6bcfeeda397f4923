"""
Syndication feed parser implementation.

This module provides the SyndicationParser class, which reads RSS and Atom
documents through feedparser and reduces every entry to a ParsedEntry.
"""

import io
import logging
import re
import xml.sax
from typing import Any, Dict, List, Optional, Union

import feedparser  # type: ignore

from rsspanel.errors import ParseError
from rsspanel.models import ParsedEntry
from rsspanel.parsers.base import FeedParser

logger = logging.getLogger(__name__)

_XML_ENCODING_RE = re.compile(r"""^(\s*<\?xml[^>]*?\bencoding\s*=\s*)["'][^"']*["']""")


class SyndicationParser(FeedParser):
    """Parses RSS and Atom feeds, whichever the document turns out to be."""

    def _to_entry(self, entry: Dict[str, Any]) -> ParsedEntry:
        """Pulls the fields we use out of a feedparser entry."""
        blocks = [
            block.get("value") or "" for block in entry.get("content") or []
        ]
        return ParsedEntry(
            title=entry.get("title") or "",
            link=entry.get("link") or "",
            summary_html=entry.get("summary") or "",
            content_blocks=[block for block in blocks if block],
        )

    def parse(
        self, raw: Union[bytes, str], content_type: Optional[str] = None
    ) -> List[ParsedEntry]:
        """Parses a feed document held in memory.

        Text is sent to feedparser as UTF-8, so an encoding named in its XML
        declaration is rewritten to match.
        """
        if isinstance(raw, str):
            raw = _XML_ENCODING_RE.sub(r'\1"utf-8"', raw, count=1).encode("utf-8")

        headers = {"content-type": content_type} if content_type else None
        try:
            # A stream keeps feedparser from treating the body as a URL or path
            feed = feedparser.parse(io.BytesIO(raw), response_headers=headers)
        except Exception as e:  # pylint: disable=broad-exception-caught
            raise ParseError(str(e) or e.__class__.__name__) from e

        problem = feed.get("bozo_exception")
        if not feed.get("version"):
            raise ParseError(str(problem) if problem else "Unrecognized feed format")

        # The loose parser recovers broken XML; such documents are still rejected
        if isinstance(problem, xml.sax.SAXException):
            raise ParseError(str(problem))

        if feed.get("bozo"):
            logger.warning(
                "Parsed %s feed with a warning: %s", feed.get("version"), problem
            )

        entries = [self._to_entry(entry) for entry in feed.get("entries", [])]
        logger.debug("Parsed %d entries from %s feed.", len(entries), feed.get("version"))
        return entries
