"""Core datatypes shared across filter modules.

Responsibilities:
- Represent the immutable message record flowing through a filter chain.
- Model the filter outcome as an explicit `Forwarded | Suppressed` sum type.

Key types:
- `Role`, `ParsedMessage`, `Forwarded`, `Suppressed`, and `FilterResult`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Mapping, Union


class Role(str, Enum):
    """Origin tag of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


def coerce_role(value: object) -> Role | None:
    """Return the `Role` matching `value`, or `None` when it is not a known role."""

    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    """A role-tagged text unit produced by an assistant transcript parser.

    Attributes:
        role: Message origin. Unrecognised raw role strings are kept verbatim.
        content: Text payload to be spoken; may be empty.
        timestamp: Optional message timestamp, passed through untouched.
        metadata: Opaque passthrough fields (ids, session keys, ...).
    """

    role: Role | str
    content: str = ""
    timestamp: datetime | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)

    def with_content(self, content: str) -> ParsedMessage:
        """Return a copy of this message with only `content` replaced."""

        return replace(self, content=content)


@dataclass(frozen=True, slots=True)
class Forwarded:
    """Filter outcome carrying the (possibly transformed) message onward."""

    message: ParsedMessage


@dataclass(frozen=True, slots=True)
class Suppressed:
    """Filter outcome meaning the message must not reach speech synthesis.

    Attributes:
        filter_name: Name of the filter that suppressed the message.
        reason: Short machine-friendly reason token.
    """

    filter_name: str
    reason: str = "suppressed"


FilterResult = Union[Forwarded, Suppressed]
