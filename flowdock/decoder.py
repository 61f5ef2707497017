"""Decode raw JSON payloads into Message values."""

from __future__ import annotations

import json
from typing import Any

from pydantic import TypeAdapter, ValidationError

from flowdock.errors import DecodeError
from flowdock.models import Message

_MESSAGE_LIST = TypeAdapter(list[Message])


def _load(raw: str | bytes) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc
    except RecursionError as exc:
        raise DecodeError("JSON nested too deeply") from exc


def decode_message(raw: str | bytes) -> Message:
    """Decode one JSON object into a Message, raising DecodeError on failure."""
    return message_from_data(_load(raw))


def decode_messages(raw: str | bytes) -> list[Message]:
    """Decode a JSON array of messages, keeping the server's order."""
    return messages_from_data(_load(raw))


def message_from_data(data: Any) -> Message:
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
    try:
        return Message.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(f"payload does not match the message shape: {exc}") from exc


def messages_from_data(data: Any) -> list[Message]:
    if not isinstance(data, list):
        raise DecodeError(f"expected a JSON array, got {type(data).__name__}")
    try:
        return _MESSAGE_LIST.validate_python(data)
    except ValidationError as exc:
        raise DecodeError(f"payload does not match the message list shape: {exc}") from exc
