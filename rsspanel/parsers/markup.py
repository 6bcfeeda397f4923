"""Markup stripping for feed text."""

import re
from typing import Optional

_TAG_RE = re.compile(r"<[^>]*>")


def strip_markup(text: Optional[str]) -> str:
    """Removes HTML/XML tags from a string and trims it.

    Entities such as ``&amp;`` are left as they are.
    """
    if not text:
        return ""
    return _TAG_RE.sub("", text).strip()
