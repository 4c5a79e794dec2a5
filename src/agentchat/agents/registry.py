"""Provider registry and the agent factory built on it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agentchat.agents.custom import CustomProviderConfig, custom_bundle
from agentchat.agents.facade import AgentFacade
from agentchat.core.errors import InvalidConfigurationError

if TYPE_CHECKING:
    from agentchat.agents.bundle import ProviderBundle
    from agentchat.agents.config import AgentConfiguration
    from agentchat.agents.memory import MemoryStore
    from agentchat.core.credentials import CredentialStore


class ProviderRegistry:
    """Maps provider keys to :class:`ProviderBundle` objects.

    Lookups are case-insensitive and accept either the registration key
    (``"openai-assistants"``) or the provider's display name
    (``"OpenAI Assistants"``).
    """

    def __init__(self) -> None:
        self._bundles: dict[str, ProviderBundle] = {}
        self._aliases: dict[str, str] = {}

    def register(self, key: str, bundle: ProviderBundle) -> None:
        """Register *bundle* under *key*, replacing any previous entry."""
        normalized = key.lower()
        self._bundles[normalized] = bundle
        self._aliases[bundle.metadata.name.lower()] = normalized

    def register_custom(self, config: CustomProviderConfig) -> ProviderBundle:
        bundle = custom_bundle(config)
        self.register(config.name, bundle)
        return bundle

    def get(self, name: str) -> ProviderBundle:
        """Return the bundle for *name*.

        Raises:
            InvalidConfigurationError: No provider is registered under *name*.
        """
        normalized = name.lower()
        key = normalized if normalized in self._bundles else self._aliases.get(normalized)
        if key is None:
            raise InvalidConfigurationError(f"unknown provider: {name}")
        return self._bundles[key]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        normalized = name.lower()
        return normalized in self._bundles or normalized in self._aliases

    def keys(self) -> list[str]:
        return list(self._bundles)

    def bundles(self) -> list[ProviderBundle]:
        return list(self._bundles.values())


_default_registry: ProviderRegistry | None = None


def get_default_registry() -> ProviderRegistry:
    """Return (and cache) the registry of built-in providers."""
    global _default_registry
    if _default_registry is None:
        from agentchat.agents.registry_data import build_default_registry

        _default_registry = build_default_registry()
    return _default_registry


def create_agent(
    provider: str,
    *,
    credentials: CredentialStore,
    memory: MemoryStore | None = None,
    configuration: AgentConfiguration | None = None,
    registry: ProviderRegistry | None = None,
) -> AgentFacade:
    """Build an :class:`AgentFacade` for a registered provider.

    With no *configuration*, the provider's default persona is used.
    """
    bundle = (registry or get_default_registry()).get(provider)
    return AgentFacade(bundle, credentials=credentials, memory=memory, configuration=configuration)
