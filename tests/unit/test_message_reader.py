"""Unit tests for JSON Lines message decoding."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from agent_tts.errors import MessageParseError
from agent_tts.filters.role import RoleFilter
from agent_tts.io.message_reader import message_from_mapping, message_to_mapping, read_messages
from agent_tts.models.datatypes import Forwarded, Role


def test_read_messages_decodes_records_and_skips_blank_lines() -> None:
    """Blank lines are ignored and line numbers still count them."""

    lines = [
        '{"role": "user", "content": "hi"}',
        "",
        '{"role": "Assistant", "content": "hello", "timestamp": "2026-01-01T10:00:00Z", "id": 7}',
    ]

    messages = list(read_messages(lines))

    assert [message.role for message in messages] == [Role.USER, Role.ASSISTANT]
    assert messages[1].content == "hello"
    assert messages[1].timestamp == datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert dict(messages[1].metadata) == {"id": 7}


def test_message_from_mapping_keeps_unknown_roles_and_null_content() -> None:
    """Unknown roles stay as raw strings and `null` content becomes empty."""

    message = message_from_mapping({"role": "tool", "content": None})

    assert message.role == "tool"
    assert message.content == ""
    assert message.timestamp is None


@pytest.mark.parametrize(
    ("line", "detail"),
    [
        ("{not json", "invalid JSON"),
        ("[1, 2]", "record must be a JSON object."),
        ('{"content": "x"}', "`role` must be a string."),
        ('{"role": "user", "content": 5}', "`content` must be a string."),
        ('{"role": "user", "timestamp": "yesterday"}', "`timestamp` is not an ISO 8601 value"),
    ],
)
def test_read_messages_reports_line_numbers(line: str, detail: str) -> None:
    """Invalid records raise `MessageParseError` naming the input line."""

    with pytest.raises(MessageParseError) as exc_info:
        list(read_messages(['{"role": "user", "content": "ok"}', line]))

    assert exc_info.value.line_number == 2
    assert detail in exc_info.value.detail


def test_message_to_mapping_restores_reserved_fields(make_message) -> None:
    """Encoding should merge metadata with role, content and timestamp."""

    payload = message_to_mapping(make_message("spoken"))

    assert payload == {
        "id": "msg-1",
        "session": "demo",
        "role": "assistant",
        "content": "spoken",
        "timestamp": "2026-01-02T03:04:05+00:00",
    }


def test_decoded_role_text_is_case_folded_before_role_gating() -> None:
    """Decoded `Assistant` roles reach the role filter as the enum member."""

    message = message_from_mapping({"role": " Assistant ", "content": "hi"})

    assert message.role is Role.ASSISTANT
    assert isinstance(RoleFilter().filter(message), Forwarded)
