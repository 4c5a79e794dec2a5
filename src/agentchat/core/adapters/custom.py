"""Format-dispatching adapter for user-defined providers.

A custom provider declares which wire shape it speaks. ``custom`` has no
shape of its own yet and degrades to the OpenAI-compatible one.
"""

from __future__ import annotations

from enum import Enum

from agentchat.core.adapters.anthropic import AnthropicRequestTransformer, AnthropicResponseParser
from agentchat.core.adapters.openai import OpenAIRequestTransformer, OpenAIResponseParser
from agentchat.core.models import UnifiedChatRequest, UnifiedChatResponse
from agentchat.core.protocol import RequestTransformer, ResponseParser


class RequestFormat(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    CUSTOM = "custom"


class ResponseFormat(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    CUSTOM = "custom"


class CustomRequestTransformer:
    """Delegates to the transformer matching *request_format*."""

    def __init__(self, request_format: RequestFormat = RequestFormat.OPENAI) -> None:
        self.request_format = request_format
        self._delegate: RequestTransformer
        if request_format is RequestFormat.ANTHROPIC:
            self._delegate = AnthropicRequestTransformer()
        else:
            self._delegate = OpenAIRequestTransformer()

    def transform(self, request: UnifiedChatRequest) -> bytes:
        return self._delegate.transform(request)


class CustomResponseParser:
    """Delegates to the parser matching *response_format*."""

    def __init__(
        self,
        response_format: ResponseFormat = ResponseFormat.OPENAI,
        default_model: str = "unknown",
    ) -> None:
        self.response_format = response_format
        self._delegate: ResponseParser
        if response_format is ResponseFormat.ANTHROPIC:
            self._delegate = AnthropicResponseParser(default_model)
        else:
            self._delegate = OpenAIResponseParser(default_model)

    def parse(self, data: bytes) -> UnifiedChatResponse:
        return self._delegate.parse(data)
