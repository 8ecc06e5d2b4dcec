"""Adapter turning a plain function into a chain filter."""

from __future__ import annotations

from typing import Callable

from ..errors import FilterConfigurationError
from ..models.datatypes import FilterResult, Forwarded, ParsedMessage
from .base import ToggleableFilter

FilterFunction = Callable[[ParsedMessage], FilterResult]


class CallableFilter(ToggleableFilter):
    """Run a user-supplied function as a named, toggleable filter."""

    def __init__(self, name: str, function: FilterFunction, enabled: bool = True) -> None:
        """Wrap `function` as a filter named `name`."""

        if not callable(function):
            raise FilterConfigurationError(
                filter_name=name,
                detail=f"Custom filter `{name}` requires a callable.",
            )
        super().__init__(name, enabled)
        self._function = function

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Delegate to the wrapped function while enabled."""

        if not self._enabled:
            return Forwarded(message)
        return self._function(message)
