"""Provider bundles: everything an agent facade needs to talk to one provider.

A bundle pairs static metadata (name, models, capabilities) with a backend
factory and a chain of configuration validators. Adding a provider means
building a bundle; the facade itself never changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from agentchat.agents.config import AgentCapability, AgentConfiguration
from agentchat.core.errors import InvalidConfigurationError
from agentchat.core.http import HTTPExecutionService, ProviderConfig

if TYPE_CHECKING:
    from agentchat.core.credentials import CredentialStore
    from agentchat.core.protocol import CompletionBackend, RequestTransformer, ResponseParser


class ProviderMetadata(BaseModel):
    """What a provider declares about itself."""

    model_config = ConfigDict(frozen=True)

    name: str
    supported_models: list[str] = []
    default_model: str
    capabilities: frozenset[AgentCapability] = frozenset()


class AgentDefaults(BaseModel):
    """Persona used when an agent is created without a configuration."""

    model_config = ConfigDict(frozen=True)

    name: str
    system_prompt: str = ""
    personality: str = ""
    role: str = ""
    icon: str = ""

    def to_configuration(self, metadata: ProviderMetadata) -> AgentConfiguration:
        return AgentConfiguration(
            name=self.name,
            system_prompt=self.system_prompt,
            personality=self.personality,
            role=self.role,
            icon=self.icon,
            preferred_provider=metadata.name,
            model=metadata.default_model,
            capabilities=set(metadata.capabilities),
        )


ConfigValidator = Callable[[AgentConfiguration, ProviderMetadata], None]
BackendFactory = Callable[["CredentialStore"], "CompletionBackend"]


@dataclass(frozen=True)
class ProviderBundle:
    metadata: ProviderMetadata
    backend_factory: BackendFactory
    validators: tuple[ConfigValidator, ...] = ()
    defaults: AgentDefaults | None = None
    transformer: RequestTransformer | None = field(default=None, compare=False)
    parser: ResponseParser | None = field(default=None, compare=False)

    @property
    def name(self) -> str:
        return self.metadata.name

    def create_backend(self, credentials: CredentialStore) -> CompletionBackend:
        return self.backend_factory(credentials)


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def require_agent_name(configuration: AgentConfiguration, metadata: ProviderMetadata) -> None:
    """Base check shared by every provider."""
    if not configuration.name.strip():
        raise InvalidConfigurationError("agent name is required")


def require_base_url(base_url: str) -> ConfigValidator:
    def _check(configuration: AgentConfiguration, metadata: ProviderMetadata) -> None:
        if not base_url.strip():
            raise InvalidConfigurationError(f"{metadata.name} base URL is required")

    return _check


def require_supported_models(configuration: AgentConfiguration, metadata: ProviderMetadata) -> None:
    if not metadata.supported_models:
        raise InvalidConfigurationError(
            f"{metadata.name} must declare at least one supported model"
        )


def run_validators(
    validators: tuple[ConfigValidator, ...],
    configuration: AgentConfiguration,
    metadata: ProviderMetadata,
) -> None:
    """Run provider validators in order, then the base check."""
    for validator in (*validators, require_agent_name):
        validator(configuration, metadata)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def http_bundle(
    config: ProviderConfig,
    transformer: RequestTransformer,
    parser: ResponseParser,
    *,
    capabilities: frozenset[AgentCapability] = frozenset({AgentCapability.TEXT_GENERATION}),
    validators: tuple[ConfigValidator, ...] = (),
    defaults: AgentDefaults | None = None,
) -> ProviderBundle:
    """Bundle a request/response provider served by :class:`HTTPExecutionService`."""

    def _factory(credentials: CredentialStore) -> CompletionBackend:
        return HTTPExecutionService(config, transformer, parser, credentials)

    return ProviderBundle(
        metadata=ProviderMetadata(
            name=config.name,
            supported_models=list(config.supported_models),
            default_model=config.default_model,
            capabilities=capabilities,
        ),
        backend_factory=_factory,
        validators=validators,
        defaults=defaults,
        transformer=transformer,
        parser=parser,
    )
