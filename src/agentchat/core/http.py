"""HTTP execution service: one POST per unified request.

The service is bound to a provider configuration, a transformer and a
parser. It keeps no state between calls, so one instance can serve many
concurrent requests.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ConfigDict, Field

from agentchat.core.cancellation import CancellationToken, guarded
from agentchat.core.errors import AuthenticationError, NetworkError, RateLimitError, ServerError
from agentchat.utils.telemetry import (
    ATTR_CONVERSATION_ID,
    ATTR_HTTP_STATUS,
    ATTR_MODEL,
    ATTR_PROVIDER,
    get_tracer,
    record_usage,
)

if TYPE_CHECKING:
    from agentchat.core.credentials import CredentialStore
    from agentchat.core.models import UnifiedChatRequest, UnifiedChatResponse
    from agentchat.core.protocol import RequestTransformer, ResponseParser

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ProviderConfig(BaseModel):
    """Static description of an HTTP chat endpoint."""

    model_config = ConfigDict(frozen=True)

    name: str
    base_url: str
    auth_header_name: str = "Authorization"
    auth_header_prefix: str = "Bearer"
    api_version: str | None = None
    api_version_header: str = "anthropic-version"
    default_model: str = ""
    supported_models: list[str] = []
    custom_headers: dict[str, str] = {}
    timeout_seconds: float = Field(default=60.0, gt=0)
    credential_key: str | None = None

    @property
    def credential_name(self) -> str:
        """Name under which the API key is looked up."""
        return self.credential_key or self.name.lower()


def raise_for_status(response: httpx.Response) -> None:
    """Map a non-2xx response to the matching :class:`ServerError` subclass."""
    status = response.status_code
    if 200 <= status < 300:
        return
    message = response.text
    if status in (401, 403):
        raise AuthenticationError(message, status)
    if status == 429:
        raise RateLimitError(message, status)
    raise ServerError(message, status)


class HTTPExecutionService:
    """Sends unified requests to a single provider endpoint.

    Satisfies the :class:`~agentchat.core.protocol.CompletionBackend` protocol.

    Usage::

        service = HTTPExecutionService(config, transformer, parser, credentials)
        response = await service.send_unified_request(request)

    No retries happen here; callers decide whether a failure is worth
    repeating.
    """

    def __init__(
        self,
        config: ProviderConfig,
        transformer: RequestTransformer,
        parser: ResponseParser,
        credentials: CredentialStore,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self.transformer = transformer
        self.parser = parser
        self.credentials = credentials
        self._client = client

    def build_headers(self) -> dict[str, str]:
        """Assemble request headers for the bound provider.

        A missing key yields an empty credential; the provider's auth
        failure then surfaces as an :class:`AuthenticationError`.
        """
        key = self.credentials.get_api_key(self.config.credential_name) or ""
        headers = {"Content-Type": "application/json"}
        headers[self.config.auth_header_name] = f"{self.config.auth_header_prefix} {key}".strip()
        if self.config.api_version:
            headers[self.config.api_version_header] = self.config.api_version
        headers.update(self.config.custom_headers)
        return headers

    async def send_unified_request(
        self,
        request: UnifiedChatRequest,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> UnifiedChatResponse:
        """Transform, POST, check status and parse.

        Raises:
            TransformError: The request could not be encoded.
            NetworkError: No HTTP response was received.
            ServerError: The provider answered with a non-2xx status.
            ParseError: The response body could not be mapped.
        """
        with _tracer.start_as_current_span("provider.request") as span:
            span.set_attribute(ATTR_PROVIDER, self.config.name)
            span.set_attribute(ATTR_MODEL, request.model)

            body = self.transformer.transform(request)
            response = await guarded(self._post(body, self.build_headers()), cancel_token)
            span.set_attribute(ATTR_HTTP_STATUS, response.status_code)

            if not 200 <= response.status_code < 300:
                logger.warning(
                    "Provider %s returned HTTP %d", self.config.name, response.status_code
                )
            raise_for_status(response)

            result = self.parser.parse(response.content)
            record_usage(span, result.usage)
            return result

    async def complete(
        self,
        request: UnifiedChatRequest,
        *,
        conversation_id: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> UnifiedChatResponse:
        if conversation_id is not None:
            logger.debug(
                "Sending %s request for conversation %s", self.config.name, conversation_id
            )
        with _tracer.start_as_current_span("provider.complete") as span:
            if conversation_id is not None:
                span.set_attribute(ATTR_CONVERSATION_ID, conversation_id)
            return await self.send_unified_request(request, cancel_token=cancel_token)

    async def _post(self, body: bytes, headers: dict[str, str]) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._client.post(self.config.base_url, content=body, headers=headers)
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                return await client.post(self.config.base_url, content=body, headers=headers)
        except httpx.HTTPError as exc:
            raise NetworkError(exc) from exc
