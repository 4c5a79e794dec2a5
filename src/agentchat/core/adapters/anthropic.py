"""Anthropic messages API adapter.

Key differences from the OpenAI shape:
- The system prompt is a top-level ``system`` field, not a message.
- ``max_tokens`` is mandatory, so a default is always sent.
- Replies are a list of typed content blocks; usage counts are named
  ``input_tokens`` / ``output_tokens`` and no total is reported.
"""

from __future__ import annotations

import logging
from typing import Any

from agentchat.core.adapters.base import (
    apply_parameters,
    as_count,
    decode_envelope,
    encode_body,
    wire_messages,
)
from agentchat.core.errors import APIError, MissingContentError
from agentchat.core.models import TokenUsage, UnifiedChatRequest, UnifiedChatResponse

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 4096


class AnthropicRequestTransformer:
    """Builds ``{model, max_tokens, messages, system?, temperature?, top_p?}`` bodies."""

    def __init__(self, default_max_tokens: int = DEFAULT_MAX_TOKENS) -> None:
        self.default_max_tokens = default_max_tokens

    def build_payload(self, request: UnifiedChatRequest) -> dict[str, Any]:
        params = request.parameters
        conversation = request.conversation_messages

        dropped = sum(1 for m in conversation if m.role == "system")
        if dropped:
            logger.debug("Dropping %d non-leading system message(s) for Anthropic", dropped)

        payload: dict[str, Any] = {
            "model": request.model,
            "max_tokens": (
                params.max_tokens if params.max_tokens is not None else self.default_max_tokens
            ),
            "messages": wire_messages([m for m in conversation if m.role != "system"]),
        }
        apply_parameters(payload, params, include_max_tokens=False)

        system = request.leading_system_message
        if system is not None and system.content:
            payload["system"] = system.content
        return payload

    def transform(self, request: UnifiedChatRequest) -> bytes:
        return encode_body(self.build_payload(request))


class AnthropicResponseParser:
    """Reads the first ``text`` block of ``content`` plus ``usage``."""

    def __init__(self, default_model: str = "unknown") -> None:
        self.default_model = default_model

    def parse(self, data: bytes) -> UnifiedChatResponse:
        envelope = decode_envelope(data)

        error = envelope.get("error")
        if error:
            if isinstance(error, dict):
                err_type = error.get("type")
                raise APIError(
                    str(error.get("message") or error),
                    str(err_type) if err_type is not None else None,
                )
            raise APIError(str(error))

        content = _first_text_block(envelope)
        if not content:
            raise MissingContentError()

        usage = envelope.get("usage") or {}
        if not isinstance(usage, dict):
            usage = {}

        return UnifiedChatResponse(
            content=content,
            model=str(envelope.get("model") or self.default_model),
            usage=TokenUsage(
                prompt_tokens=as_count(usage.get("input_tokens")),
                completion_tokens=as_count(usage.get("output_tokens")),
            ),
        )


def _first_text_block(envelope: dict[str, Any]) -> str | None:
    blocks = envelope.get("content")
    if not isinstance(blocks, list):
        return None
    for block in blocks:
        if isinstance(block, dict) and block.get("type") == "text":
            text = block.get("text")
            if isinstance(text, str):
                return text
    return None
