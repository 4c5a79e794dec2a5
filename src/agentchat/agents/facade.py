"""AgentFacade: the single entry point a chat UI uses to talk to an agent.

One facade type serves every provider. Provider differences live in the
:class:`~agentchat.agents.bundle.ProviderBundle` it is built from; shared
services (credentials, memory) are injected at construction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from agentchat.agents.bundle import run_validators
from agentchat.agents.config import AgentCapability, AgentConfiguration
from agentchat.agents.memory import MemoryKind
from agentchat.core.models import ChatMessage, RequestParameters, UnifiedChatRequest
from agentchat.utils.telemetry import ATTR_AGENT_ID, ATTR_MODEL, ATTR_PROVIDER, get_tracer

if TYPE_CHECKING:
    from agentchat.agents.bundle import ProviderBundle
    from agentchat.agents.memory import MemoryStore
    from agentchat.core.cancellation import CancellationToken
    from agentchat.core.credentials import CredentialStore
    from agentchat.core.protocol import CompletionBackend

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

_CONTEXT_ROLES = frozenset({"user", "assistant"})


class AgentFacade:
    """Sends user text to the agent's provider and returns the reply text.

    Usage::

        agent = AgentFacade(bundle, credentials=store, memory=memory)
        reply = await agent.send_message("Hello", conversation_id="c-1")
    """

    def __init__(
        self,
        bundle: ProviderBundle,
        *,
        credentials: CredentialStore,
        memory: MemoryStore | None = None,
        configuration: AgentConfiguration | None = None,
        backend: CompletionBackend | None = None,
    ) -> None:
        self.bundle = bundle
        self.credentials = credentials
        self.memory = memory
        self.configuration = configuration or self._default_configuration()
        self.backend = backend or bundle.create_backend(credentials)

    def _default_configuration(self) -> AgentConfiguration:
        if self.bundle.defaults is not None:
            return self.bundle.defaults.to_configuration(self.bundle.metadata)
        return AgentConfiguration(
            name=f"{self.bundle.metadata.name} Assistant",
            preferred_provider=self.bundle.metadata.name,
            capabilities=set(self.bundle.metadata.capabilities),
        )

    # ------------------------------------------------------------------
    # Provider metadata
    # ------------------------------------------------------------------

    @property
    def provider_name(self) -> str:
        return self.bundle.metadata.name

    @property
    def supported_models(self) -> list[str]:
        return list(self.bundle.metadata.supported_models)

    @property
    def capabilities(self) -> frozenset[AgentCapability]:
        return self.bundle.metadata.capabilities

    @property
    def is_multi_agent_capable(self) -> bool:
        return AgentCapability.COLLABORATION in self.capabilities

    def can_collaborate_with(self, other: AgentFacade) -> bool:
        return self.is_multi_agent_capable and other.is_multi_agent_capable

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def validate_configuration(self, model: str | None = None) -> None:
        """Run the provider's validators followed by the base check.

        An explicit *model* is validated in place of the configured one.

        Raises:
            InvalidConfigurationError: The first failing check's reason.
        """
        configuration = self.configuration
        if model:
            configuration = configuration.model_copy(update={"model": model})
        run_validators(self.bundle.validators, configuration, self.bundle.metadata)

    def resolve_model(self, model: str | None = None) -> str:
        """Explicit model, else the configured default, else the provider fallback."""
        return model or self.configuration.model or self.bundle.metadata.default_model

    def build_request(
        self,
        text: str,
        model: str | None = None,
        history: Sequence[ChatMessage] | None = None,
    ) -> UnifiedChatRequest:
        """System prompt, then the trailing ``context_window`` history turns, then *text*."""
        config = self.configuration
        messages: list[ChatMessage] = []
        if config.system_prompt:
            messages.append(ChatMessage.system(config.system_prompt))

        window = config.context_window
        if history and window > 0:
            messages.extend(m for m in history[-window:] if m.role != "system")
        messages.append(ChatMessage.user(text))

        return UnifiedChatRequest(
            model=self.resolve_model(model),
            messages=messages,
            parameters=RequestParameters(
                temperature=config.temperature,
                max_tokens=config.max_tokens,
            ),
        )

    async def send_message(
        self,
        text: str,
        model: str | None = None,
        *,
        conversation_id: str | None = None,
        history: Sequence[ChatMessage] | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Validate, send one turn, hand the reply to memory and return it.

        Provider errors propagate unchanged. Memory failures are logged and
        never fail the call.
        """
        self.validate_configuration(model)
        request = self.build_request(text, model, history)

        with _tracer.start_as_current_span("agent.send_message") as span:
            span.set_attribute(ATTR_AGENT_ID, str(self.configuration.id))
            span.set_attribute(ATTR_PROVIDER, self.provider_name)
            span.set_attribute(ATTR_MODEL, request.model)

            response = await self.backend.complete(
                request, conversation_id=conversation_id, cancel_token=cancel_token
            )

        await self._remember(response.content, response.model or request.model, conversation_id)
        return response.content

    async def _remember(self, content: str, model: str, conversation_id: str | None) -> None:
        if self.memory is None or not self.configuration.memory_enabled:
            return
        metadata = {
            "provider": self.provider_name,
            "model": model,
            "role": "assistant",
        }
        try:
            await self.memory.save_memory(
                self.configuration.id,
                conversation_id,
                content,
                MemoryKind.CONVERSATION_CONTEXT,
                metadata,
            )
        except Exception:
            logger.warning(
                "Failed to save memory for agent %s", self.configuration.id, exc_info=True
            )

    # ------------------------------------------------------------------
    # Conversation memory
    # ------------------------------------------------------------------

    async def load_conversation_context(self, conversation_id: str) -> list[ChatMessage]:
        """Remembered turns of *conversation_id*, oldest first.

        Entries without a usable ``role`` in their metadata are skipped. Pass
        the result as ``history`` to :meth:`send_message` to resume a chat.
        """
        if self.memory is None:
            return []
        entries = await self.memory.load_memories(
            self.configuration.id,
            kind=MemoryKind.CONVERSATION_CONTEXT,
            conversation_id=conversation_id,
        )
        return [
            ChatMessage(role=entry.metadata["role"], content=entry.content)
            for entry in entries
            if entry.metadata.get("role") in _CONTEXT_ROLES
        ]

    async def clear_conversation_memory(self, conversation_id: str) -> None:
        """Forget everything this agent remembered for *conversation_id*."""
        if self.memory is None:
            return
        await self.memory.clear_memories(self.configuration.id, conversation_id=conversation_id)
