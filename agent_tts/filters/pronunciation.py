"""Pronunciation remapping filter.

Responsibilities:
- Merge the built-in default pronunciation table with caller overrides.
- Rewrite developer jargon a speech engine would mispronounce, in one
  case-insensitive left-to-right pass.
- Split camelCase identifiers in the text between matched terms.

Key types:
- `PronunciationRules`: immutable merged table plus its compiled matcher.
- `PronunciationFilter`: chain member holding the current rules snapshot.

Default replacements are stored without padding. Keys that start with
punctuation (file extensions such as `.js`) carry one leading space so the
spoken form does not run into the preceding word: `app.js` -> `app dot J S`.
The padding is dropped when the term already follows whitespace.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from types import MappingProxyType
from typing import Mapping

from ..errors import FilterConfigurationError
from ..models.datatypes import FilterResult, Forwarded, ParsedMessage
from .base import ToggleableFilter

PRONUNCIATION_FILTER_NAME = "pronunciation"

_CAMEL_CASE_RE = re.compile(r"([a-z])([A-Z])")

DEFAULT_PRONUNCIATIONS: Mapping[str, str] = MappingProxyType(
    {
        # version control
        "git": "ghit",
        "github": "ghit hub",
        "gitlab": "ghit lab",
        # package managers and runtimes
        "npm": "N P M",
        "npx": "N P X",
        "pnpm": "P N P M",
        "pypi": "pie P I",
        "nodejs": "node J S",
        # protocols and formats
        "api": "A P I",
        "url": "U R L",
        "http": "H T T P",
        "https": "H T T P S",
        "ssh": "S S H",
        "tcp": "T C P",
        "sql": "sequel",
        "sqlite": "sequel light",
        "json": "jay son",
        "jsonl": "jay son L",
        "xml": "X M L",
        "html": "H T M L",
        "css": "C S S",
        "yaml": "yam-ul",
        "graphql": "graph Q L",
        "oauth": "oh auth",
        "uuid": "U U I D",
        "guid": "goo id",
        "gif": "jiff",
        "pdf": "P D F",
        "png": "P N G",
        "jpg": "jay peg",
        "jpeg": "jay peg",
        "svg": "S V G",
        # tooling vocabulary
        "cli": "C L I",
        "gui": "gooey",
        "ide": "I D E",
        "ui": "U I",
        "ux": "U X",
        "tts": "tee-tee-ess",
        "regex": "reg ex",
        "enum": "e num",
        "async": "a sync",
        "stdout": "standard out",
        "stderr": "standard error",
        # file extensions
        ".js": " dot J S",
        ".ts": " dot T S",
        ".tsx": " dot T S X",
        ".py": " dot pie",
        ".md": " dot M D",
        # AI vendors and products
        "ai": "A I",
        "llm": "L L M",
        "openai": "open A I",
        "chatgpt": "chat G P T",
        "gpt": "G P T",
        "anthropic": "ann throw pick",
        "claude": "clawed",
    }
)


def merge_pronunciation_tables(
    overrides: Mapping[str, str] | None = None,
    defaults: Mapping[str, str] = DEFAULT_PRONUNCIATIONS,
) -> dict[str, str]:
    """Overlay `overrides` onto `defaults` with case-insensitive keys.

    Override entries replace the default entry with the same lowercase key,
    unmatched defaults are kept, and new override keys are added.

    Raises:
        FilterConfigurationError: If a key or replacement is not a usable string,
            or two override keys collide once lowercased.
    """

    merged = {
        _normalize_key(key): _validate_replacement(key, value)
        for key, value in defaults.items()
    }
    if not overrides:
        return merged

    seen: dict[str, str] = {}
    for raw_key, value in overrides.items():
        key = _normalize_key(raw_key)
        if key in seen:
            raise FilterConfigurationError(
                filter_name=PRONUNCIATION_FILTER_NAME,
                detail=f"Override keys `{seen[key]}` and `{raw_key}` collide case-insensitively.",
                hint="Keep one spelling per term; matching ignores case.",
            )
        seen[key] = str(raw_key)
        merged[key] = _validate_replacement(raw_key, value)
    return merged


def _normalize_key(raw_key: object) -> str:
    """Return the lowercase lookup key for a table entry."""

    if not isinstance(raw_key, str) or not raw_key.strip():
        raise FilterConfigurationError(
            filter_name=PRONUNCIATION_FILTER_NAME,
            detail=f"Pronunciation key `{raw_key!r}` must be a non-blank string.",
        )
    return raw_key.strip().lower()


def _validate_replacement(raw_key: object, value: object) -> str:
    """Return `value` when it is usable replacement text."""

    if not isinstance(value, str):
        raise FilterConfigurationError(
            filter_name=PRONUNCIATION_FILTER_NAME,
            detail=f"Replacement for `{raw_key}` must be a string, got {type(value).__name__}.",
        )
    return value


def _term_pattern(term: str) -> str:
    """Return a regex fragment matching `term` as a whole token."""

    pattern = re.escape(term)
    if re.match(r"\w", term[0]):
        pattern = r"(?<!\w)" + pattern
    if re.match(r"\w", term[-1]):
        pattern = pattern + r"(?!\w)"
    return pattern


def split_camel_case(text: str) -> str:
    """Insert a space at each lowercase-to-uppercase step: `myVariable` -> `my Variable`."""

    return _CAMEL_CASE_RE.sub(r"\1 \2", text)


@dataclass(frozen=True, slots=True)
class PronunciationRules:
    """Immutable merged table with its compiled single-pass matcher.

    Attributes:
        table: Read-only lowercase term -> replacement mapping.
        pattern: Alternation of every term, longest first, or `None` when empty.
        replacements: Replacement text indexed by capture group number - 1.
    """

    table: Mapping[str, str]
    pattern: re.Pattern[str] | None
    replacements: tuple[str, ...]

    @classmethod
    def build(
        cls,
        overrides: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] = DEFAULT_PRONUNCIATIONS,
    ) -> PronunciationRules:
        """Merge tables and compile the matcher, failing fast on bad input."""

        return cls.from_table(merge_pronunciation_tables(overrides, defaults))

    @classmethod
    def from_table(cls, table: Mapping[str, str]) -> PronunciationRules:
        """Compile the matcher for an already merged lowercase-keyed table."""

        terms = sorted(table, key=lambda term: (-len(term), term))
        if not terms:
            return cls(table=MappingProxyType({}), pattern=None, replacements=())

        alternation = "|".join(f"({_term_pattern(term)})" for term in terms)
        try:
            pattern = re.compile(alternation, re.IGNORECASE)
        except re.error as exc:
            raise FilterConfigurationError(
                filter_name=PRONUNCIATION_FILTER_NAME,
                detail=f"Pronunciation table could not be compiled: {exc}",
            ) from exc

        return cls(
            table=MappingProxyType(dict(table)),
            pattern=pattern,
            replacements=tuple(table[term] for term in terms),
        )

    def apply(self, text: str) -> str:
        """Rewrite `text` in one left-to-right pass.

        Matched terms get their replacement; the text between matches gets
        camelCase splitting. Replacement text is never scanned again.
        """

        if self.pattern is None:
            return split_camel_case(text)

        pieces: list[str] = []
        position = 0
        for match in self.pattern.finditer(text):
            pieces.append(split_camel_case(text[position : match.start()]))
            pieces.append(self._replacement(match))
            position = match.end()
        pieces.append(split_camel_case(text[position:]))
        return "".join(pieces)

    def _replacement(self, match: re.Match[str]) -> str:
        """Return the replacement for `match`, dropping padding after whitespace."""

        replacement = self.replacements[match.lastindex - 1]
        start = match.start()
        if start == 0 or match.string[start - 1].isspace():
            return replacement.lstrip()
        return replacement


class PronunciationFilter(ToggleableFilter):
    """Rewrite hard-to-pronounce developer terms for speech synthesis."""

    def __init__(
        self,
        overrides: Mapping[str, str] | None = None,
        enabled: bool = True,
        defaults: Mapping[str, str] = DEFAULT_PRONUNCIATIONS,
    ) -> None:
        """Build the initial rules snapshot from `defaults` plus `overrides`."""

        super().__init__(PRONUNCIATION_FILTER_NAME, enabled)
        self._defaults = defaults
        self._rules = PronunciationRules.build(overrides, defaults)

    @property
    def table(self) -> Mapping[str, str]:
        """Effective merged table of the current snapshot."""

        return self._rules.table

    def set_overrides(self, overrides: Mapping[str, str] | None) -> None:
        """Rebuild the merged table from defaults plus `overrides` and swap it in.

        Entries added or removed one at a time are discarded. On error the
        previous table stays in effect.
        """

        self._rules = PronunciationRules.build(overrides, self._defaults)

    def add_replacement(self, term: str, replacement: str) -> None:
        """Add or replace one entry of the current table."""

        table = dict(self._rules.table)
        table[_normalize_key(term)] = _validate_replacement(term, replacement)
        self._rules = PronunciationRules.from_table(table)

    def remove_replacement(self, term: str) -> None:
        """Remove one entry, default or override, from the current table.

        Removing a term that is not in the table leaves the table unchanged.
        """

        key = _normalize_key(term)
        if key not in self._rules.table:
            return
        table = {name: text for name, text in self._rules.table.items() if name != key}
        self._rules = PronunciationRules.from_table(table)

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Apply the current rules snapshot to message content."""

        if not self._enabled or not message.content:
            return Forwarded(message)

        rules = self._rules
        return Forwarded(message.with_content(rules.apply(message.content)))
