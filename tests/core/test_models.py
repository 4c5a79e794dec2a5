"""Tests for the unified message model."""

import pytest
from pydantic import ValidationError

from agentchat.core.models import (
    ChatMessage,
    JsonDocument,
    RequestParameters,
    TokenUsage,
    UnifiedChatRequest,
    UnifiedChatResponse,
)


class TestChatMessage:
    def test_constructors_set_role(self) -> None:
        assert ChatMessage.system("s").role == "system"
        assert ChatMessage.user("u").role == "user"
        assert ChatMessage.assistant("a").role == "assistant"

    def test_rejects_unknown_role(self) -> None:
        with pytest.raises(ValidationError):
            ChatMessage(role="tool", content="x")  # type: ignore[arg-type]

    def test_structural_equality(self) -> None:
        assert ChatMessage.user("hi") == ChatMessage(role="user", content="hi")

    def test_frozen(self) -> None:
        msg = ChatMessage.user("hi")
        with pytest.raises(ValidationError):
            msg.content = "changed"  # type: ignore[misc]


class TestRequestParameters:
    def test_defaults_are_none(self) -> None:
        params = RequestParameters()
        assert params.temperature is None
        assert params.max_tokens is None
        assert params.top_p is None

    def test_out_of_range_values_pass_through(self) -> None:
        params = RequestParameters(temperature=7.5, top_p=-1.0, max_tokens=0)
        assert params.temperature == 7.5
        assert params.top_p == -1.0
        assert params.max_tokens == 0


class TestUnifiedChatRequest:
    def test_leading_system_message(self) -> None:
        req = UnifiedChatRequest(
            model="m",
            messages=[ChatMessage.system("be brief"), ChatMessage.user("hi")],
        )
        assert req.leading_system_message == ChatMessage.system("be brief")
        assert req.conversation_messages == [ChatMessage.user("hi")]

    def test_no_leading_system_message(self) -> None:
        req = UnifiedChatRequest(
            model="m",
            messages=[ChatMessage.user("hi"), ChatMessage.system("late")],
        )
        assert req.leading_system_message is None
        assert len(req.conversation_messages) == 2


class TestTokenUsage:
    def test_total_not_synthesised(self) -> None:
        usage = TokenUsage(prompt_tokens=3, completion_tokens=4)
        assert usage.total_tokens is None

    def test_defaults_zero(self) -> None:
        usage = TokenUsage()
        assert usage.prompt_tokens == 0
        assert usage.completion_tokens == 0

    def test_response_default_usage(self) -> None:
        resp = UnifiedChatResponse(content="ok", model="m")
        assert resp.usage == TokenUsage()


class TestJsonDocument:
    def test_encode_preserves_key_order(self) -> None:
        doc = JsonDocument({"b": 1, "a": [1, 2], "c": {"z": None}})
        assert doc.encode() == '{"b":1,"a":[1,2],"c":{"z":null}}'

    def test_decode(self) -> None:
        doc = JsonDocument.decode('{"x": {"y": true}, "n": 1.5}')
        assert doc["x"] == {"y": True}
        assert doc.get("n") == 1.5
        assert doc.get("missing", "d") == "d"
        assert "x" in doc
        assert len(doc) == 2

    def test_decode_rejects_non_object(self) -> None:
        with pytest.raises(ValidationError):
            JsonDocument.decode("[1, 2]")

    def test_empty_default(self) -> None:
        assert JsonDocument().encode() == "{}"
