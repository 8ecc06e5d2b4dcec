"""Length limiting filter."""

from __future__ import annotations

import re

from ..errors import FilterConfigurationError
from ..models.datatypes import FilterResult, Forwarded, ParsedMessage
from .base import ToggleableFilter

LENGTH_FILTER_NAME = "length"
DEFAULT_MAX_LENGTH = 500
DEFAULT_TRUNCATE_INDICATOR = "..."

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")


def truncate_to_sentences(content: str, max_length: int, indicator: str) -> str:
    """Keep whole leading sentences that fit within `max_length`, then append `indicator`.

    When even the first sentence is too long the text is hard-cut so the
    result including the indicator stays within `max_length`.
    """

    if len(content) <= max_length:
        return content

    sentences = _SENTENCE_RE.findall(content) or [content]
    kept = ""
    for sentence in sentences:
        if len(kept) + len(sentence) > max_length:
            break
        kept += sentence

    if not kept:
        kept = content[: max_length - len(indicator)]
    return kept + indicator


class LengthFilter(ToggleableFilter):
    """Truncate long messages at a sentence boundary."""

    def __init__(
        self,
        max_length: int = DEFAULT_MAX_LENGTH,
        truncate_indicator: str = DEFAULT_TRUNCATE_INDICATOR,
        enabled: bool = True,
    ) -> None:
        """Create the filter with validated length limits."""

        super().__init__(LENGTH_FILTER_NAME, enabled)
        self._limits = self._validate(max_length, truncate_indicator)

    @property
    def max_length(self) -> int:
        """Current maximum content length."""

        return self._limits[0]

    @property
    def truncate_indicator(self) -> str:
        """Suffix appended to truncated content."""

        return self._limits[1]

    def set_max_length(self, max_length: int) -> None:
        """Validate and swap in a new length limit."""

        self._limits = self._validate(max_length, self._limits[1])

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Truncate content longer than the current limit."""

        if not self._enabled or not message.content:
            return Forwarded(message)

        max_length, indicator = self._limits
        if len(message.content) <= max_length:
            return Forwarded(message)
        return Forwarded(
            message.with_content(truncate_to_sentences(message.content, max_length, indicator))
        )

    @staticmethod
    def _validate(max_length: int, indicator: str) -> tuple[int, str]:
        """Validate limits and return them as one snapshot tuple."""

        if isinstance(max_length, bool) or not isinstance(max_length, int) or max_length <= 0:
            raise FilterConfigurationError(
                filter_name=LENGTH_FILTER_NAME,
                detail="`max_length` must be a positive integer.",
            )
        if not isinstance(indicator, str) or len(indicator) >= max_length:
            raise FilterConfigurationError(
                filter_name=LENGTH_FILTER_NAME,
                detail="`truncate_indicator` must be a string shorter than `max_length`.",
            )
        return max_length, indicator
