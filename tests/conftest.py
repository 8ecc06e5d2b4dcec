"""Shared pytest fixtures for the full agent-tts test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest

from agent_tts.models.datatypes import ParsedMessage, Role


@pytest.fixture
def make_message() -> Callable[..., ParsedMessage]:
    """Build messages with passthrough metadata so field preservation is checkable."""

    def _make(content: str, role: Role | str = Role.ASSISTANT) -> ParsedMessage:
        """Build one message with fixed timestamp and metadata."""

        return ParsedMessage(
            role=role,
            content=content,
            timestamp=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
            metadata={"id": "msg-1", "session": "demo"},
        )

    return _make
