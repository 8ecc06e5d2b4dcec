"""URL collapsing filter.

Speech engines read URLs character by character, so every URL-like run is
replaced with the single word `URL`.
"""

from __future__ import annotations

import re

from ..models.datatypes import FilterResult, Forwarded, ParsedMessage
from .base import ToggleableFilter

URL_FILTER_NAME = "url-filter"
URL_REPLACEMENT = "URL"

_URL_RE = re.compile(r"(?:(?:https?|ftp|file)://|www\.)\S+", re.IGNORECASE)


class UrlFilter(ToggleableFilter):
    """Replace http(s), ftp, file and bare `www.` URLs with `URL`."""

    def __init__(self, enabled: bool = True) -> None:
        """Create the filter, enabled by default."""

        super().__init__(URL_FILTER_NAME, enabled)

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Replace URLs in message content with a spoken placeholder."""

        if not self._enabled or not message.content:
            return Forwarded(message)

        return Forwarded(message.with_content(_URL_RE.sub(URL_REPLACEMENT, message.content)))
