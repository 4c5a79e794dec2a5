"""Helpers shared by the provider adapters."""

from __future__ import annotations

import json
from typing import Any

from agentchat.core.errors import InvalidFormatError, TransformError
from agentchat.core.models import ChatMessage, RequestParameters


def encode_body(payload: dict[str, Any]) -> bytes:
    """Serialize a request payload to UTF-8 JSON bytes."""
    try:
        return json.dumps(payload, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise TransformError(str(exc)) from exc


def decode_envelope(data: bytes) -> dict[str, Any]:
    """Decode a response body that must be a JSON object."""
    try:
        decoded: Any = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidFormatError(str(exc)) from exc
    if not isinstance(decoded, dict):
        raise InvalidFormatError(f"expected a JSON object, got {type(decoded).__name__}")
    return decoded


def wire_messages(messages: list[ChatMessage]) -> list[dict[str, str]]:
    """Render messages as ``{role, content}`` dicts, skipping empty turns."""
    return [{"role": m.role, "content": m.content} for m in messages if m.content]


def apply_parameters(
    payload: dict[str, Any],
    parameters: RequestParameters,
    *,
    include_max_tokens: bool = True,
) -> None:
    """Copy the set sampling parameters into *payload*."""
    if parameters.temperature is not None:
        payload["temperature"] = parameters.temperature
    if include_max_tokens and parameters.max_tokens is not None:
        payload["max_tokens"] = parameters.max_tokens
    if parameters.top_p is not None:
        payload["top_p"] = parameters.top_p


def as_count(value: Any) -> int:
    """Coerce a reported token count, treating anything unusable as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0
