"""Tests for the Anthropic adapter."""

import json

import pytest

from agentchat.core.adapters.anthropic import AnthropicRequestTransformer, AnthropicResponseParser
from agentchat.core.errors import APIError, InvalidFormatError, MissingContentError
from agentchat.core.models import ChatMessage, RequestParameters, UnifiedChatRequest


class TestAnthropicRequestTransformer:
    def test_extracts_leading_system_message(self) -> None:
        req = UnifiedChatRequest(
            model="claude-sonnet-4-20250514",
            messages=[ChatMessage.system("be brief"), ChatMessage.user("hi")],
        )
        body = json.loads(AnthropicRequestTransformer().transform(req))
        assert body["system"] == "be brief"
        assert body["messages"] == [{"role": "user", "content": "hi"}]

    def test_default_max_tokens(self) -> None:
        req = UnifiedChatRequest(model="m", messages=[ChatMessage.user("hi")])
        body = json.loads(AnthropicRequestTransformer().transform(req))
        assert body["max_tokens"] == 4096
        assert "system" not in body
        assert "temperature" not in body
        assert "top_p" not in body

    def test_explicit_parameters(self) -> None:
        req = UnifiedChatRequest(
            model="m",
            messages=[ChatMessage.user("hi")],
            parameters=RequestParameters(temperature=0.3, max_tokens=100, top_p=0.8),
        )
        body = json.loads(AnthropicRequestTransformer().transform(req))
        assert body["max_tokens"] == 100
        assert body["temperature"] == 0.3
        assert body["top_p"] == 0.8

    def test_non_leading_system_dropped(self) -> None:
        req = UnifiedChatRequest(
            model="m",
            messages=[
                ChatMessage.user("hi"),
                ChatMessage.system("ignored"),
                ChatMessage.assistant("hello"),
            ],
        )
        body = json.loads(AnthropicRequestTransformer().transform(req))
        assert "system" not in body
        assert [m["role"] for m in body["messages"]] == ["user", "assistant"]


class TestAnthropicResponseParser:
    def test_parse_success_total_none(self) -> None:
        data = (
            b'{"content":[{"type":"text","text":"Hello"}],"model":"claude",'
            b'"usage":{"input_tokens":10,"output_tokens":5}}'
        )
        resp = AnthropicResponseParser().parse(data)
        assert resp.content == "Hello"
        assert resp.model == "claude"
        assert resp.usage.prompt_tokens == 10
        assert resp.usage.completion_tokens == 5
        assert resp.usage.total_tokens is None

    def test_skips_non_text_blocks(self) -> None:
        data = json.dumps({
            "content": [{"type": "tool_use", "id": "t"}, {"type": "text", "text": "answer"}],
        }).encode()
        assert AnthropicResponseParser().parse(data).content == "answer"

    def test_api_error(self) -> None:
        data = b'{"type":"error","error":{"type":"overloaded_error","message":"Overloaded"}}'
        with pytest.raises(APIError) as exc_info:
            AnthropicResponseParser().parse(data)
        assert exc_info.value.message == "Overloaded"
        assert exc_info.value.code == "overloaded_error"

    def test_missing_content(self) -> None:
        with pytest.raises(MissingContentError):
            AnthropicResponseParser().parse(b'{"content":[]}')

    def test_invalid_format(self) -> None:
        with pytest.raises(InvalidFormatError):
            AnthropicResponseParser().parse(b"not json")
