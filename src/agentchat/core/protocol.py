"""Transform/parse protocol implemented by every provider adapter.

A provider is described by a :class:`RequestTransformer` (unified request to
wire bytes) and a :class:`ResponseParser` (wire bytes to unified response).
A :class:`CompletionBackend` turns a unified request into a unified
response, whether through one HTTP round trip or a multi-step async run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from agentchat.core.cancellation import CancellationToken
    from agentchat.core.models import UnifiedChatRequest, UnifiedChatResponse


@runtime_checkable
class RequestTransformer(Protocol):
    """Serializes a unified request into a provider's request body."""

    def transform(self, request: UnifiedChatRequest) -> bytes:
        """Return the JSON body for *request*.

        Message order is preserved and optional parameters are only emitted
        when set.

        Raises:
            TransformError: If the body cannot be serialized.
        """
        ...


@runtime_checkable
class ResponseParser(Protocol):
    """Decodes a provider's response body into a unified response."""

    def parse(self, data: bytes) -> UnifiedChatResponse:
        """Map a raw response body to a :class:`UnifiedChatResponse`.

        Raises:
            InvalidFormatError: The body is not a JSON object.
            APIError: The provider returned a structured error.
            MissingContentError: The envelope has no reply content.
        """
        ...


@runtime_checkable
class CompletionBackend(Protocol):
    """Anything that can answer a unified chat request."""

    async def complete(
        self,
        request: UnifiedChatRequest,
        *,
        conversation_id: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> UnifiedChatResponse:
        ...
