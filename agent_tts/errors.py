"""Domain exceptions for filter configuration and message input diagnostics."""

from __future__ import annotations


class FilterConfigurationError(ValueError):
    """Raised when a filter or chain is given configuration it cannot apply."""

    def __init__(
        self,
        *,
        filter_name: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a filter-scoped configuration error."""

        super().__init__(detail)
        self.filter_name = filter_name
        self.detail = detail
        self.hint = hint


class MessageParseError(ValueError):
    """Raised when a JSON Lines message record cannot be decoded."""

    def __init__(self, *, line_number: int, detail: str) -> None:
        """Initialize a line-scoped parse error."""

        super().__init__(f"line {line_number}: {detail}")
        self.line_number = line_number
        self.detail = detail
