"""Unit tests for CLI output and error rendering helpers."""

from __future__ import annotations

import json

import pytest
import typer

from agent_tts.cli_rendering import (
    echo_message,
    echo_pronunciation_table,
    echo_run_summary,
    echo_suppressed,
    exit_with_command_error,
)
from agent_tts.errors import FilterConfigurationError, MessageParseError
from agent_tts.models.datatypes import Suppressed


def test_exit_with_command_error_renders_filter_error_with_hint(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print filter diagnostics and hint before exiting with code 1."""

    error = FilterConfigurationError(
        filter_name="role",
        detail="Unknown role `robot`.",
        hint="Supported roles: assistant, system, user.",
    )

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("filter", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "filter failed at filter `role`: Unknown role `robot`." in captured.err
    assert "Hint: Supported roles: assistant, system, user." in captured.err


def test_exit_with_command_error_renders_parse_error_line(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should point at the failing input line for parse errors."""

    error = MessageParseError(line_number=3, detail="record must be a JSON object.")

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("filter", error)

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "filter failed reading input at line 3: record must be a JSON object." in captured.err


def test_exit_with_command_error_renders_generic_fallback(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Renderer should print fallback exception text for other failures."""

    with pytest.raises(typer.Exit) as exc_info:
        exit_with_command_error("preview", RuntimeError("unexpected failure"))

    captured = capsys.readouterr()
    assert exc_info.value.exit_code == 1
    assert "preview failed: unexpected failure" in captured.err


def test_echo_message_renders_text_and_jsonl(
    capsys: pytest.CaptureFixture[str], make_message
) -> None:
    """Text output prints content only; JSON Lines output keeps every field."""

    message = make_message("ghit push")

    echo_message(message, "text")
    echo_message(message, "jsonl")

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "ghit push"
    assert json.loads(lines[1]) == {
        "content": "ghit push",
        "id": "msg-1",
        "role": "assistant",
        "session": "demo",
        "timestamp": "2026-01-02T03:04:05+00:00",
    }


def test_echo_helpers_render_notices_tables_and_summary(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Notices and tables go to stdout, run summaries to stderr."""

    echo_suppressed(Suppressed(filter_name="role", reason="role_not_allowed"))
    echo_pronunciation_table({"npm": "N P M", ".py": " dot pie"})
    echo_run_summary(2, 1)

    captured = capsys.readouterr()
    assert captured.out.splitlines() == [
        "(suppressed by role: role_not_allowed)",
        ".py -> dot pie",
        "npm -> N P M",
    ]
    assert "Forwarded: 2, suppressed: 1" in captured.err
