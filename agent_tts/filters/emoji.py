"""Emoji stripping filter.

Speech engines tend to read emoji by their Unicode names ("party popper"), so
emoji code points and the joiners, selectors and modifiers used to build
compound emoji are removed before synthesis.
"""

from __future__ import annotations

import re

from ..models.datatypes import FilterResult, Forwarded, ParsedMessage
from .base import ToggleableFilter

EMOJI_FILTER_NAME = "emoji-filter"

_EMOJI_RANGES = (
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F300-\U0001F5FF"  # misc symbols and pictographs, skin tones
    "\U0001F680-\U0001F6FF"  # transport and map
    "\U0001F1E0-\U0001F1FF"  # regional indicators
    "\U0001F900-\U0001F9FF"  # supplemental symbols and pictographs
    "\U0001FA70-\U0001FAFF"  # symbols and pictographs extension A
    "\U0001F018-\U0001F270"  # playing cards, enclosed alphanumeric supplement
    "\u2600-\u26FF"  # misc symbols
    "\u2700-\u27BF"  # dingbats
    "\u238C-\u2454"  # misc technical, control pictures
    "\u2B1B\u2B1C\u2B50\u2B55"  # large squares and stars
    "\u231A\u231B\u2328"  # watch, hourglass, keyboard
    "\u25AA-\u25FE"  # geometric shapes with emoji presentation
    "\u2194-\u2199\u21A9\u21AA"  # arrows with emoji presentation
    "\u2139\u203C\u2049"  # information source, double marks
    "\u2934\u2935\u3030\u303D\u3297\u3299"  # curved arrows, wavy dash, CJK marks
    "\u20D0-\u20FF"  # combining marks for symbols, keycap
    "\uFE00-\uFE0F"  # variation selectors
    "\u200D"  # zero-width joiner
    "\U000E0020-\U000E007F"  # tag characters
)

_EMOJI_RE = re.compile(f"\\s*[{_EMOJI_RANGES}]+")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_emoji(text: str) -> str:
    """Remove emoji with the whitespace before them, then collapse whitespace runs."""

    return _WHITESPACE_RE.sub(" ", _EMOJI_RE.sub("", text)).strip()


class EmojiFilter(ToggleableFilter):
    """Remove emoji from message content."""

    def __init__(self, enabled: bool = True) -> None:
        """Create the filter, enabled by default."""

        super().__init__(EMOJI_FILTER_NAME, enabled)

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Strip emoji from message content."""

        if not self._enabled or not message.content:
            return Forwarded(message)

        return Forwarded(message.with_content(strip_emoji(message.content)))
