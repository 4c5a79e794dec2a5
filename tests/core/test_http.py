"""Tests for HTTPExecutionService."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from agentchat.core.adapters.anthropic import AnthropicRequestTransformer, AnthropicResponseParser
from agentchat.core.adapters.openai import OpenAIRequestTransformer, OpenAIResponseParser
from agentchat.core.credentials import InMemoryCredentialStore
from agentchat.core.errors import (
    APIError,
    AuthenticationError,
    NetworkError,
    RateLimitError,
    ServerError,
)
from agentchat.core.http import HTTPExecutionService, ProviderConfig
from agentchat.core.models import ChatMessage, UnifiedChatRequest

_OK_BODY = (
    b'{"choices":[{"message":{"content":"Hi"}}],"model":"gpt-x",'
    b'"usage":{"prompt_tokens":1,"completion_tokens":1}}'
)

_OPENAI = ProviderConfig(
    name="OpenAI",
    base_url="https://api.openai.com/v1/chat/completions",
    default_model="gpt-4o-mini",
    supported_models=["gpt-4o-mini"],
)

_ANTHROPIC = ProviderConfig(
    name="Anthropic",
    base_url="https://api.anthropic.com/v1/messages",
    auth_header_name="x-api-key",
    auth_header_prefix="",
    api_version="2023-06-01",
)


def _request() -> UnifiedChatRequest:
    return UnifiedChatRequest(model="gpt-4o-mini", messages=[ChatMessage.user("hi")])


def _response(status: int = 200, content: bytes = _OK_BODY, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.content = content
    response.text = text or content.decode()
    return response


def _mock_client(response: MagicMock | None = None, side_effect: Exception | None = None) -> AsyncMock:
    client = AsyncMock()
    client.post = AsyncMock(return_value=response, side_effect=side_effect)
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    return client


def _service(
    config: ProviderConfig = _OPENAI, keys: dict[str, str] | None = None
) -> HTTPExecutionService:
    return HTTPExecutionService(
        config,
        OpenAIRequestTransformer(),
        OpenAIResponseParser(config.default_model),
        InMemoryCredentialStore(keys if keys is not None else {"openai": "sk-test"}),
    )


class TestBuildHeaders:
    def test_bearer_header(self) -> None:
        headers = _service().build_headers()
        assert headers["Authorization"] == "Bearer sk-test"
        assert headers["Content-Type"] == "application/json"

    def test_missing_key_is_empty_credential(self) -> None:
        headers = _service(keys={}).build_headers()
        assert headers["Authorization"] == "Bearer"

    def test_anthropic_headers(self) -> None:
        service = HTTPExecutionService(
            _ANTHROPIC,
            AnthropicRequestTransformer(),
            AnthropicResponseParser(),
            InMemoryCredentialStore({"anthropic": "ak-1"}),
        )
        headers = service.build_headers()
        assert headers["x-api-key"] == "ak-1"
        assert headers["anthropic-version"] == "2023-06-01"
        assert "Authorization" not in headers

    def test_custom_headers_merged(self) -> None:
        config = _OPENAI.model_copy(update={"custom_headers": {"X-Team": "r&d"}})
        assert _service(config).build_headers()["X-Team"] == "r&d"

    def test_credential_key_override(self) -> None:
        config = _OPENAI.model_copy(update={"credential_key": "shared"})
        headers = _service(config, {"shared": "k"}).build_headers()
        assert headers["Authorization"] == "Bearer k"


class TestSendUnifiedRequest:
    async def test_success(self) -> None:
        client = _mock_client(_response())
        with patch("agentchat.core.http.httpx.AsyncClient", return_value=client):
            resp = await _service().send_unified_request(_request())

        assert resp.content == "Hi"
        assert resp.model == "gpt-x"
        assert resp.usage.total_tokens is None
        client.post.assert_awaited_once()
        call = client.post.call_args
        assert call.args[0] == _OPENAI.base_url
        sent = json.loads(call.kwargs["content"])
        assert sent["messages"] == [{"role": "user", "content": "hi"}]
        assert call.kwargs["headers"]["Authorization"] == "Bearer sk-test"

    async def test_injected_client(self) -> None:
        client = _mock_client(_response())
        service = HTTPExecutionService(
            _OPENAI,
            OpenAIRequestTransformer(),
            OpenAIResponseParser(),
            InMemoryCredentialStore({"openai": "sk"}),
            client=client,
        )
        resp = await service.send_unified_request(_request())
        assert resp.content == "Hi"
        client.__aenter__.assert_not_called()

    @pytest.mark.parametrize(
        ("status", "error_cls"),
        [(401, AuthenticationError), (403, AuthenticationError), (429, RateLimitError)],
    )
    async def test_status_classification(self, status: int, error_cls: type[Exception]) -> None:
        client = _mock_client(_response(status, b'{"error":"nope"}', "nope"))
        with patch("agentchat.core.http.httpx.AsyncClient", return_value=client):
            with pytest.raises(error_cls) as exc_info:
                await _service().send_unified_request(_request())
        assert isinstance(exc_info.value, ServerError)
        assert exc_info.value.status_code == status  # type: ignore[attr-defined]

    async def test_server_error_carries_body(self) -> None:
        client = _mock_client(_response(500, b"upstream exploded", "upstream exploded"))
        with patch("agentchat.core.http.httpx.AsyncClient", return_value=client):
            with pytest.raises(ServerError) as exc_info:
                await _service().send_unified_request(_request())
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "upstream exploded"
        assert not isinstance(exc_info.value, (AuthenticationError, RateLimitError))

    async def test_no_retry_on_server_error(self) -> None:
        client = _mock_client(_response(503, b"busy", "busy"))
        with patch("agentchat.core.http.httpx.AsyncClient", return_value=client):
            with pytest.raises(ServerError):
                await _service().send_unified_request(_request())
        assert client.post.await_count == 1

    async def test_transport_error(self) -> None:
        client = _mock_client(side_effect=httpx.ConnectError("refused"))
        with patch("agentchat.core.http.httpx.AsyncClient", return_value=client):
            with pytest.raises(NetworkError, match="refused"):
                await _service().send_unified_request(_request())

    async def test_parse_errors_propagate(self) -> None:
        client = _mock_client(_response(200, b'{"error":{"message":"bad model"}}'))
        with patch("agentchat.core.http.httpx.AsyncClient", return_value=client):
            with pytest.raises(APIError, match="bad model"):
                await _service().send_unified_request(_request())

    async def test_complete_delegates(self) -> None:
        client = _mock_client(_response())
        with patch("agentchat.core.http.httpx.AsyncClient", return_value=client):
            resp = await _service().complete(_request(), conversation_id="conv-1")
        assert resp.content == "Hi"
