"""Message input and output helpers."""

from .message_reader import message_from_mapping, message_to_mapping, read_messages

__all__ = ["message_from_mapping", "message_to_mapping", "read_messages"]
