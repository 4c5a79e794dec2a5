"""OpenAI-compatible chat completions adapter.

Also serves DeepSeek, Grok, Mistral and Perplexity, which accept the same
request body and return the same envelope.
"""

from __future__ import annotations

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


class OpenAIRequestTransformer:
    """Builds ``{model, messages, temperature?, max_tokens?, top_p?}`` bodies.

    *extra_fields* are provider-fixed keys merged into every body, e.g.
    ``{"stream": False}``.
    """

    def __init__(self, extra_fields: dict[str, Any] | None = None) -> None:
        self.extra_fields = dict(extra_fields or {})

    def build_payload(self, request: UnifiedChatRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": request.model,
            "messages": wire_messages(request.messages),
        }
        apply_parameters(payload, request.parameters)
        payload.update(self.extra_fields)
        return payload

    def transform(self, request: UnifiedChatRequest) -> bytes:
        return encode_body(self.build_payload(request))


class OpenAIResponseParser:
    """Reads ``choices[0].message.content`` plus ``usage`` from the envelope."""

    def __init__(self, default_model: str = "unknown") -> None:
        self.default_model = default_model

    def parse(self, data: bytes) -> UnifiedChatResponse:
        envelope = decode_envelope(data)

        error = envelope.get("error")
        if error:
            raise _api_error(error)

        content = _first_choice_content(envelope)
        if not content:
            raise MissingContentError()

        usage = envelope.get("usage") or {}
        if not isinstance(usage, dict):
            usage = {}
        total = usage.get("total_tokens")

        return UnifiedChatResponse(
            content=content,
            model=str(envelope.get("model") or self.default_model),
            usage=TokenUsage(
                prompt_tokens=as_count(usage.get("prompt_tokens")),
                completion_tokens=as_count(usage.get("completion_tokens")),
                total_tokens=as_count(total) if total is not None else None,
            ),
        )


def _first_choice_content(envelope: dict[str, Any]) -> str | None:
    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def _api_error(error: Any) -> APIError:
    if isinstance(error, dict):
        message = str(error.get("message") or error)
        code = error.get("code")
        return APIError(message, str(code) if code is not None else None)
    return APIError(str(error))
