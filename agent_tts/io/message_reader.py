"""JSON Lines message decoding and encoding.

Each input line is one JSON object with `role`, `content` and an optional ISO
`timestamp`; any other keys are carried through as opaque metadata.
"""

from __future__ import annotations

from datetime import datetime
import json
from typing import Any, Iterable, Iterator, Mapping

from ..errors import MessageParseError
from ..models.datatypes import ParsedMessage, Role, coerce_role

_RESERVED_KEYS = frozenset({"role", "content", "timestamp"})


def _parse_timestamp(value: object, line_number: int) -> datetime | None:
    """Parse an optional ISO 8601 timestamp, accepting a trailing `Z`."""

    if value is None:
        return None
    if not isinstance(value, str):
        raise MessageParseError(line_number=line_number, detail="`timestamp` must be a string.")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise MessageParseError(
            line_number=line_number,
            detail=f"`timestamp` is not an ISO 8601 value: {value!r}.",
        ) from exc


def message_from_mapping(payload: Mapping[str, Any], line_number: int = 1) -> ParsedMessage:
    """Build a `ParsedMessage` from a decoded JSON object."""

    raw_role = payload.get("role")
    if not isinstance(raw_role, str):
        raise MessageParseError(line_number=line_number, detail="`role` must be a string.")

    content = payload.get("content")
    if content is None:
        content = ""
    if not isinstance(content, str):
        raise MessageParseError(line_number=line_number, detail="`content` must be a string.")

    role: Role | str = coerce_role(raw_role) or raw_role
    return ParsedMessage(
        role=role,
        content=content,
        timestamp=_parse_timestamp(payload.get("timestamp"), line_number),
        metadata={key: value for key, value in payload.items() if key not in _RESERVED_KEYS},
    )


def message_to_mapping(message: ParsedMessage) -> dict[str, Any]:
    """Encode a message as a JSON-serializable mapping."""

    payload: dict[str, Any] = dict(message.metadata)
    payload["role"] = message.role.value if isinstance(message.role, Role) else message.role
    payload["content"] = message.content
    if message.timestamp is not None:
        payload["timestamp"] = message.timestamp.isoformat()
    return payload


def read_messages(lines: Iterable[str]) -> Iterator[ParsedMessage]:
    """Yield messages from JSON Lines text, skipping blank lines."""

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as exc:
            raise MessageParseError(
                line_number=line_number, detail=f"invalid JSON: {exc.msg}."
            ) from exc
        if not isinstance(payload, Mapping):
            raise MessageParseError(line_number=line_number, detail="record must be a JSON object.")
        yield message_from_mapping(payload, line_number)
