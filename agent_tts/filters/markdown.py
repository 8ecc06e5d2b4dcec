"""Markdown cleanup filter.

Responsibilities:
- Strip markdown syntax that would otherwise be read aloud.
- Give list items terminal punctuation so speech engines pause between them.
"""

from __future__ import annotations

import re

from ..models.datatypes import FilterResult, Forwarded, ParsedMessage, Suppressed
from .base import ToggleableFilter

MARKDOWN_FILTER_NAME = "markdown-filter"

_CODE_BLOCK_RE = re.compile(r"```.*?```", re.DOTALL)
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_HEADER_RE = re.compile(r"#{1,6}\s+")
_BOLD_ITALIC_RE = re.compile(r"\*\*\*([^*]+)\*\*\*")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")
_ITALIC_RE = re.compile(r"(?<![*\w])\*(?![\s*])([^*\n]+?)(?<!\s)\*(?!\*)")
_UNDERSCORE_RE = re.compile(r"(?<!\w)_{1,3}([^_\n]+)_{1,3}(?!\w)")
_STRIKE_RE = re.compile(r"~~([^~]+)~~")
_NUMBERED_ITEM_RE = re.compile(r"^\s*\d+\.\s+")
_BULLET_ITEM_RE = re.compile(r"^\s*[-*+]\s+")
_BULLET_MARKER_RE = re.compile(r"^\s*[-*+]\s+", re.MULTILINE)
_NUMBERED_MARKER_RE = re.compile(r"^(\s*\d+)\.\s+", re.MULTILINE)
_INLINE_WHITESPACE_RE = re.compile(r"[^\S\n]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_SENTENCE_END_RE = re.compile(r"[.!?]$")


def _is_list_item(line: str) -> bool:
    """Return whether `line` is a bullet or numbered list item."""

    return bool(_NUMBERED_ITEM_RE.match(line) or _BULLET_ITEM_RE.match(line))


def _ends_with_punctuation(text: str) -> bool:
    """Return whether `text` already ends a sentence."""

    return bool(_SENTENCE_END_RE.search(text.strip()))


def _list_item_content(line: str) -> str:
    """Return list item text without its marker."""

    return _BULLET_ITEM_RE.sub("", _NUMBERED_ITEM_RE.sub("", line)).strip()


def add_periods_to_list_items(content: str) -> str:
    """Terminate list items, and the line introducing a list, with a period."""

    lines = content.split("\n")
    processed: list[str] = []

    for index, line in enumerate(lines):
        following = lines[index + 1] if index + 1 < len(lines) else None
        next_non_empty = next(
            (candidate for candidate in lines[index + 1:] if candidate.strip()),
            None,
        )

        if _is_list_item(line):
            closes_item = (
                following is None or not following.strip() or _is_list_item(following)
            )
            item_text = _list_item_content(line)
            if closes_item and item_text and not _ends_with_punctuation(item_text):
                trimmed = line.rstrip()
                line = trimmed + "." + line[len(trimmed):]
        elif line.strip() and next_non_empty is not None and _is_list_item(next_non_empty):
            trimmed = line.rstrip()
            if not _ends_with_punctuation(trimmed):
                line = trimmed[:-1] + "." if trimmed.endswith(":") else trimmed + "."

        processed.append(line)

    return "\n".join(processed)


def clean_markdown(content: str) -> str:
    """Return `content` with markdown syntax removed and whitespace normalized."""

    content = _CODE_BLOCK_RE.sub("", content)
    content = _INLINE_CODE_RE.sub(r"\1", content)
    content = _LINK_RE.sub(r"\1", content)
    content = _HEADER_RE.sub("", content)
    content = _BOLD_ITALIC_RE.sub(r"\1", content)
    content = _BOLD_RE.sub(r"\1", content)
    content = _ITALIC_RE.sub(r"\1", content)
    content = _UNDERSCORE_RE.sub(r"\1", content)
    content = _STRIKE_RE.sub(r"\1", content)

    content = add_periods_to_list_items(content)

    content = _BULLET_MARKER_RE.sub("", content)
    content = _NUMBERED_MARKER_RE.sub(r"\1. ", content)

    content = _INLINE_WHITESPACE_RE.sub(" ", content)
    content = _BLANK_LINES_RE.sub("\n\n", content)
    return content.strip()


class MarkdownFilter(ToggleableFilter):
    """Remove markdown formatting; suppress messages that were only markup."""

    def __init__(self, enabled: bool = True) -> None:
        """Create the filter, enabled by default."""

        super().__init__(MARKDOWN_FILTER_NAME, enabled)

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Clean markdown, suppressing messages left empty."""

        if not self._enabled or not message.content:
            return Forwarded(message)

        cleaned = clean_markdown(message.content)
        if not cleaned:
            return Suppressed(filter_name=self._name, reason="empty_after_markdown")
        return Forwarded(message.with_content(cleaned))
