"""Ordered filter composition.

Responsibilities:
- Run a message through an ordered filter tuple with early exit on suppression.
- Allow the filter tuple to be replaced while other threads are filtering.
"""

from __future__ import annotations

from typing import Iterable

from ..models.datatypes import FilterResult, Forwarded, ParsedMessage, Suppressed
from ..telemetry.logger import FilterLogger
from .base import MessageFilter


class FilterChain:
    """Apply filters in configured order, stopping at the first suppression."""

    def __init__(
        self,
        filters: Iterable[MessageFilter] = (),
        logger: FilterLogger | None = None,
    ) -> None:
        """Initialize with an ordered filter sequence and optional event logger."""

        self._filters: tuple[MessageFilter, ...] = tuple(filters)
        self._logger = logger or FilterLogger()

    @property
    def filters(self) -> tuple[MessageFilter, ...]:
        """Current filter snapshot in execution order."""

        return self._filters

    def process(self, message: ParsedMessage) -> FilterResult:
        """Fold `message` through every filter, returning the first suppression."""

        current = message
        for message_filter in self._filters:
            result = message_filter.filter(current)
            if isinstance(result, Suppressed):
                self._logger.log_suppressed(result.filter_name, message.role, result.reason)
                return result
            current = result.message
        return Forwarded(current)

    def get_filter(self, name: str) -> MessageFilter | None:
        """Return the first filter named `name`, if any."""

        return next((item for item in self._filters if item.name == name), None)

    def add_filter(self, message_filter: MessageFilter) -> None:
        """Append a filter to the end of the chain."""

        self._filters = (*self._filters, message_filter)

    def remove_filter(self, name: str) -> None:
        """Drop every filter named `name`."""

        self._filters = tuple(item for item in self._filters if item.name != name)

    def replace_filters(self, filters: Iterable[MessageFilter]) -> None:
        """Swap in a complete new filter sequence."""

        self._filters = tuple(filters)
