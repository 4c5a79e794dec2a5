"""Agent facades, configuration, memory hand-off and the provider registry."""

from agentchat.agents.bundle import AgentDefaults, ProviderBundle, ProviderMetadata
from agentchat.agents.config import AgentCapability, AgentConfiguration
from agentchat.agents.custom import CustomProviderConfig, custom_bundle, load_custom_providers
from agentchat.agents.facade import AgentFacade
from agentchat.agents.memory import InMemoryMemoryStore, MemoryEntry, MemoryKind, MemoryStore
from agentchat.agents.registry import ProviderRegistry, create_agent, get_default_registry

__all__ = [
    "AgentCapability",
    "AgentConfiguration",
    "AgentDefaults",
    "AgentFacade",
    "CustomProviderConfig",
    "InMemoryMemoryStore",
    "MemoryEntry",
    "MemoryKind",
    "MemoryStore",
    "ProviderBundle",
    "ProviderMetadata",
    "ProviderRegistry",
    "create_agent",
    "custom_bundle",
    "get_default_registry",
    "load_custom_providers",
]
