"""Structured filter event logging.

Responsibilities:
- Emit concise, deterministic filter-level log lines through `loguru`.
- Keep message payload text out of log lines.
"""

from __future__ import annotations

from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def format_filter_event(level: str, event: str, filter_name: str, **context: object) -> str:
    """Render one structured filter event line."""

    return (
        f"[filter] level={level} filter={_sanitize_context_value(filter_name)} "
        f"event={event}{_format_context(context)}"
    )


class FilterLogger:
    """Emit deterministic filter events for chain and configuration activity."""

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Initialize the logger.

        Package events stay disabled until a sink is given; passing one replaces
        loguru handlers with that sink and enables `agent_tts` events.
        """

        if sink is not None:
            _loguru_logger.remove()
            _loguru_logger.add(sink, format="{message}", level=level, colorize=False)
            _loguru_logger.enable("agent_tts")

    def _emit(self, level: str, event: str, filter_name: str, **context: object) -> None:
        """Emit one structured runtime log line."""

        _loguru_logger.log(level, format_filter_event(level, event, filter_name, **context))

    def log_suppressed(self, filter_name: str, role: object, reason: str) -> None:
        """Emit a suppression event without the suppressed payload."""

        self._emit(
            "DEBUG",
            "suppressed",
            filter_name,
            role=getattr(role, "value", role),
            reason=reason,
        )

    def log_configured(self, filter_name: str, **context: object) -> None:
        """Emit a configuration-applied event."""

        self._emit("DEBUG", "configured", filter_name, **context)

    def log_rejected(self, filter_name: str, error_type: str) -> None:
        """Emit a configuration-rejected event."""

        self._emit("ERROR", "rejected", filter_name, error_type=error_type)
