"""Tests for AssistantsClient."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from agentchat.assistants.client import AssistantsClient
from agentchat.core.credentials import InMemoryCredentialStore
from agentchat.core.errors import AuthenticationError, InvalidFormatError, NetworkError


def _response(payload: Any, status: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.json = MagicMock(return_value=payload)
    response.text = str(payload)
    return response


def _mock_client(*responses: MagicMock, side_effect: Exception | None = None) -> AsyncMock:
    client = AsyncMock()
    client.request = AsyncMock(side_effect=side_effect or list(responses))
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    return client


def _assistants() -> AssistantsClient:
    return AssistantsClient(InMemoryCredentialStore({"openai": "sk-test"}))


class TestHeaders:
    def test_beta_and_bearer(self) -> None:
        headers = _assistants().build_headers()
        assert headers["OpenAI-Beta"] == "assistants=v2"
        assert headers["Authorization"] == "Bearer sk-test"


class TestEndpoints:
    async def test_create_thread(self) -> None:
        client = _mock_client(_response({"id": "thread_abc", "object": "thread"}))
        with patch("agentchat.assistants.client.httpx.AsyncClient", return_value=client):
            thread_id = await _assistants().create_thread()

        assert thread_id == "thread_abc"
        call = client.request.call_args
        assert call.args == ("POST", "https://api.openai.com/v1/threads")

    async def test_create_message(self) -> None:
        client = _mock_client(_response({"id": "msg_1"}))
        with patch("agentchat.assistants.client.httpx.AsyncClient", return_value=client):
            message_id = await _assistants().create_message("thread_abc", "hello")

        assert message_id == "msg_1"
        call = client.request.call_args
        assert call.args[1].endswith("/threads/thread_abc/messages")
        assert call.kwargs["json"] == {"role": "user", "content": "hello"}

    async def test_create_run_and_get_run(self) -> None:
        client = _mock_client(
            _response({"id": "run_1", "status": "queued"}),
            _response({"id": "run_1", "status": "in_progress", "thread_id": "thread_abc"}),
        )
        with patch("agentchat.assistants.client.httpx.AsyncClient", return_value=client):
            assistants = _assistants()
            run = await assistants.create_run("thread_abc", "asst_9")
            polled = await assistants.get_run("thread_abc", "run_1")

        assert run.status == "queued"
        assert polled.status == "in_progress"
        first, second = client.request.call_args_list
        assert first.kwargs["json"] == {"assistant_id": "asst_9"}
        assert second.args == ("GET", "https://api.openai.com/v1/threads/thread_abc/runs/run_1")

    async def test_list_messages(self) -> None:
        payload = {
            "data": [
                {
                    "id": "msg_2",
                    "role": "assistant",
                    "run_id": "run_1",
                    "content": [{"type": "text", "text": {"value": "Hi!", "annotations": []}}],
                }
            ]
        }
        client = _mock_client(_response(payload))
        with patch("agentchat.assistants.client.httpx.AsyncClient", return_value=client):
            messages = await _assistants().list_messages("thread_abc")

        assert messages.reply_for_run("run_1") == "Hi!"
        assert messages.reply_for_run("run_2") is None


class TestErrors:
    async def test_transport_error(self) -> None:
        client = _mock_client(side_effect=httpx.ReadTimeout("slow"))
        with patch("agentchat.assistants.client.httpx.AsyncClient", return_value=client):
            with pytest.raises(NetworkError):
                await _assistants().create_thread()

    async def test_status_error(self) -> None:
        client = _mock_client(_response({"error": "bad key"}, status=401))
        with patch("agentchat.assistants.client.httpx.AsyncClient", return_value=client):
            with pytest.raises(AuthenticationError):
                await _assistants().create_thread()

    async def test_unexpected_envelope(self) -> None:
        client = _mock_client(_response({"object": "thread"}))
        with patch("agentchat.assistants.client.httpx.AsyncClient", return_value=client):
            with pytest.raises(InvalidFormatError):
                await _assistants().create_thread()

    async def test_undecodable_body(self) -> None:
        response = _response(None)
        response.json = MagicMock(side_effect=ValueError("not json"))
        client = _mock_client(response)
        with patch("agentchat.assistants.client.httpx.AsyncClient", return_value=client):
            with pytest.raises(InvalidFormatError):
                await _assistants().create_thread()
