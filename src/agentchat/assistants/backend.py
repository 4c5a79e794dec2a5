"""Adapts :class:`CompletionStateMachine` to the completion backend protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agentchat.core.errors import TransformError
from agentchat.core.models import TokenUsage, UnifiedChatResponse

if TYPE_CHECKING:
    from agentchat.assistants.state_machine import CompletionStateMachine
    from agentchat.core.cancellation import CancellationToken
    from agentchat.core.models import UnifiedChatRequest


class AssistantsBackend:
    """Sends the latest user message to a remote assistant.

    The request's ``model`` is the assistant id. Earlier turns and the
    system prompt already live on the server side (thread history and
    assistant instructions), so only the newest user message is posted.
    Usage is not reported by the runs API and stays at zero.
    """

    def __init__(self, state_machine: CompletionStateMachine) -> None:
        self.state_machine = state_machine

    async def complete(
        self,
        request: UnifiedChatRequest,
        *,
        conversation_id: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> UnifiedChatResponse:
        text = next(
            (m.content for m in reversed(request.messages) if m.role == "user"), None
        )
        if not text:
            raise TransformError("no user message to send")
        if not request.model:
            raise TransformError("an assistant id is required as the model")

        reply = await self.state_machine.run(
            text,
            assistant_id=request.model,
            conversation_id=conversation_id,
            cancel_token=cancel_token,
        )
        return UnifiedChatResponse(content=reply, model=request.model, usage=TokenUsage())
