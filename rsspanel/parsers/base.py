"""
Base classes and interfaces for feed parsers.

This module defines the contract that all feed parsers must follow.
"""

from typing import List, Optional, Protocol, Union

from rsspanel.models import ParsedEntry


class FeedParser(Protocol):
    """
    Protocol for feed parsers.

    Classes implementing this protocol turn the raw body of a feed document
    into a list of ParsedEntry, in document order, and raise ParseError when
    the body is not a feed they understand.
    """

    def parse(
        self, raw: Union[bytes, str], content_type: Optional[str] = None
    ) -> List[ParsedEntry]:
        """Parses a feed document."""
