"""AssistantsClient: the five HTTP calls behind a thread-based completion."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from agentchat.assistants.models import (
    MessageList,
    MessageResponse,
    RunResponse,
    ThreadResponse,
)
from agentchat.core.errors import InvalidFormatError, NetworkError
from agentchat.core.http import raise_for_status

if TYPE_CHECKING:
    from agentchat.core.credentials import CredentialStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
BETA_HEADER = "assistants=v2"

_M = TypeVar("_M", bound=BaseModel)


class AssistantsClient:
    """Talks to the Assistants API (threads, messages, runs).

    Usage::

        client = AssistantsClient(credentials)
        thread_id = await client.create_thread()
        await client.create_message(thread_id, "Hello")
        run = await client.create_run(thread_id, "asst_123")
    """

    def __init__(
        self,
        credentials: CredentialStore,
        *,
        base_url: str = DEFAULT_BASE_URL,
        credential_name: str = "openai",
        timeout_seconds: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.credential_name = credential_name
        self.timeout_seconds = timeout_seconds
        self._client = client

    def build_headers(self) -> dict[str, str]:
        key = self.credentials.get_api_key(self.credential_name) or ""
        return {
            "Authorization": f"Bearer {key}".strip(),
            "Content-Type": "application/json",
            "OpenAI-Beta": BETA_HEADER,
        }

    async def create_thread(self) -> str:
        data = await self._request("POST", "/threads", {})
        return _validate(ThreadResponse, data).id

    async def create_message(self, thread_id: str, content: str) -> str:
        data = await self._request(
            "POST",
            f"/threads/{thread_id}/messages",
            {"role": "user", "content": content},
        )
        return _validate(MessageResponse, data).id

    async def create_run(self, thread_id: str, assistant_id: str) -> RunResponse:
        data = await self._request(
            "POST", f"/threads/{thread_id}/runs", {"assistant_id": assistant_id}
        )
        return _validate(RunResponse, data)

    async def get_run(self, thread_id: str, run_id: str) -> RunResponse:
        data = await self._request("GET", f"/threads/{thread_id}/runs/{run_id}")
        return _validate(RunResponse, data)

    async def list_messages(self, thread_id: str) -> MessageList:
        data = await self._request("GET", f"/threads/{thread_id}/messages")
        return _validate(MessageList, data)

    async def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> Any:
        url = f"{self.base_url}{path}"
        headers = self.build_headers()
        logger.debug("Assistants API %s %s", method, path)
        try:
            if self._client is not None:
                response = await self._client.request(method, url, headers=headers, json=body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.request(method, url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            raise NetworkError(exc) from exc

        raise_for_status(response)
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidFormatError(str(exc)) from exc


def _validate(model: type[_M], data: Any) -> _M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise InvalidFormatError(f"{model.__name__}: {exc}") from exc
