"""Provider-specific request transformers and response parsers."""

from agentchat.core.adapters.anthropic import AnthropicRequestTransformer, AnthropicResponseParser
from agentchat.core.adapters.custom import (
    CustomRequestTransformer,
    CustomResponseParser,
    RequestFormat,
    ResponseFormat,
)
from agentchat.core.adapters.openai import OpenAIRequestTransformer, OpenAIResponseParser

__all__ = [
    "AnthropicRequestTransformer",
    "AnthropicResponseParser",
    "CustomRequestTransformer",
    "CustomResponseParser",
    "OpenAIRequestTransformer",
    "OpenAIResponseParser",
    "RequestFormat",
    "ResponseFormat",
]
