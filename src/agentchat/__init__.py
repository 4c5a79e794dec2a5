"""agentchat: one chat contract over many LLM providers."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from agentchat.agents.facade import AgentFacade as AgentFacade
    from agentchat.agents.registry import create_agent as create_agent
    from agentchat.core.models import ChatMessage as ChatMessage
    from agentchat.core.models import UnifiedChatRequest as UnifiedChatRequest
    from agentchat.core.models import UnifiedChatResponse as UnifiedChatResponse

_LAZY_EXPORTS = {
    "AgentFacade": "agentchat.agents.facade",
    "create_agent": "agentchat.agents.registry",
    "ChatMessage": "agentchat.core.models",
    "UnifiedChatRequest": "agentchat.core.models",
    "UnifiedChatResponse": "agentchat.core.models",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'agentchat' has no attribute {name!r}")
