"""Filter capability shared by every chain member.

Responsibilities:
- Define the `MessageFilter` protocol consumed by `FilterChain`.
- Provide the enabled-flag and name bookkeeping concrete filters reuse.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models.datatypes import FilterResult, ParsedMessage


@runtime_checkable
class MessageFilter(Protocol):
    """Protocol for named, toggleable message filters."""

    @property
    def name(self) -> str:
        """Stable identifier used for logging and configuration lookup."""

    @property
    def enabled(self) -> bool:
        """Whether the filter currently transforms messages."""

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the filter."""

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Forward, transform, or suppress one message.

        A disabled filter must return the message unchanged.
        """


class ToggleableFilter:
    """Name and enabled-flag state owned by each concrete filter instance."""

    def __init__(self, name: str, enabled: bool = True) -> None:
        """Store the filter name and initial enabled flag."""

        self._name = name
        self._enabled = bool(enabled)

    @property
    def name(self) -> str:
        """Stable filter identifier."""

        return self._name

    @property
    def enabled(self) -> bool:
        """Whether the filter currently transforms messages."""

        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable the filter."""

        self._enabled = bool(enabled)

    def __repr__(self) -> str:
        """Return a debug representation with name and enabled flag."""

        return f"{type(self).__name__}(name={self._name!r}, enabled={self._enabled})"
