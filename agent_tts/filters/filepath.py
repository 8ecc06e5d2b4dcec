"""File path shortening filter.

Reading `/usr/local/share/project/src/app.py` aloud is useless, so paths are
reduced to their last meaningful segment (`app.py`).

Handled forms:
- Unix, home-relative and dot-relative paths: `~/projects/demo/` -> `demo`
- Windows paths: `C:\\Users\\dev\\file.txt` -> `file.txt`
- Paths inside backticks, double quotes or parentheses
"""

from __future__ import annotations

import re

from ..models.datatypes import FilterResult, Forwarded, ParsedMessage
from .base import ToggleableFilter

FILEPATH_FILTER_NAME = "filepath-filter"

_GENERIC_DIRECTORY_NAMES = frozenset({"storage", "share", "local", "bin", "lib", "src", "dist"})

_BACKTICK_PATH_RE = re.compile(r"`([^`]*[\\/][^`]*)`")
_QUOTED_PATH_RE = re.compile(r'"([^"]*[\\/][^"]*)"')
_PAREN_PATH_RE = re.compile(r"\(([^)]*[\\/][^)]*)\)")
_STANDALONE_PATH_RE = re.compile(
    r"(?:(?<=\s)|^)((?:~|\.{1,2})?[\\/][\w.-]+(?:[\\/][\w.-]+)+[\\/]?)(?=\s|$)",
    re.MULTILINE,
)
_WINDOWS_ENV_VAR_RE = re.compile(r"%[A-Z_]+%")
_PATH_INDICATOR_RE = re.compile(r"^(?:\.|~|/|[A-Za-z]:|\\\\)")
_FILE_EXTENSION_RE = re.compile(r"\.\w{1,4}$")
_TRAILING_SEPARATORS_RE = re.compile(r"[\\/]+$")
_SEPARATOR_RE = re.compile(r"[\\/]")


def simplify_path(path: str) -> str:
    """Return the spoken form of `path`: its last meaningful segment."""

    if "<" in path and ">" in path:
        after_placeholder = path.split(">", 1)[1]
        if after_placeholder:
            path = after_placeholder

    segments = _SEPARATOR_RE.split(_TRAILING_SEPARATORS_RE.sub("", path))
    last = segments[-1]

    if not last or last in {".", ".."}:
        if len(segments) > 1 and segments[-2]:
            return segments[-2]
        return "filepath"

    if last.lower() in _GENERIC_DIRECTORY_NAMES and len(segments) > 1:
        parent = segments[-2]
        if parent and parent not in {".", ".."}:
            return f"{parent}/{last}"
    return last


def looks_like_path(text: str) -> bool:
    """Return whether parenthesized text is plausibly a file path."""

    if not _SEPARATOR_RE.search(text):
        return False
    return bool(_PATH_INDICATOR_RE.match(text) or _FILE_EXTENSION_RE.search(text))


def shorten_paths(content: str) -> str:
    """Replace every recognised path in `content` with its simplified form."""

    content = _BACKTICK_PATH_RE.sub(
        lambda match: f"`{simplify_path(_WINDOWS_ENV_VAR_RE.sub('', match.group(1)))}`",
        content,
    )
    content = _QUOTED_PATH_RE.sub(lambda match: f'"{simplify_path(match.group(1))}"', content)
    content = _PAREN_PATH_RE.sub(
        lambda match: (
            f"({simplify_path(match.group(1))})"
            if looks_like_path(match.group(1))
            else match.group(0)
        ),
        content,
    )
    return _STANDALONE_PATH_RE.sub(lambda match: simplify_path(match.group(1)), content)


class FilepathFilter(ToggleableFilter):
    """Shorten file paths to the segment worth speaking."""

    def __init__(self, enabled: bool = True) -> None:
        """Create the filter, enabled by default."""

        super().__init__(FILEPATH_FILTER_NAME, enabled)

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Shorten every recognised path in message content."""

        if not self._enabled or not message.content:
            return Forwarded(message)

        return Forwarded(message.with_content(shorten_paths(message.content)))
