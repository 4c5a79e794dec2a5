"""User-defined providers: configuration model, bundle builder and YAML loader.

A providers file looks like::

    providers:
      - name: local-llm
        base_url: http://localhost:8080/v1/chat/completions
        api_key: ${LOCAL_LLM_KEY}
        request_format: openai
        response_format: openai
        supported_models: [llama-3-8b]
        headers:
          X-Team: research

``${VAR}`` / ``$VAR`` references are expanded from the environment before
parsing.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, SecretStr, ValidationError

from agentchat.agents.bundle import (
    AgentDefaults,
    ProviderBundle,
    ProviderMetadata,
    require_base_url,
    require_supported_models,
)
from agentchat.agents.config import AgentCapability
from agentchat.core.adapters.custom import (
    CustomRequestTransformer,
    CustomResponseParser,
    RequestFormat,
    ResponseFormat,
)
from agentchat.core.credentials import InMemoryCredentialStore
from agentchat.core.errors import InvalidConfigurationError
from agentchat.core.http import HTTPExecutionService, ProviderConfig

if TYPE_CHECKING:
    from agentchat.core.credentials import CredentialStore
    from agentchat.core.protocol import CompletionBackend


class CustomProviderConfig(BaseModel):
    """Declaration of an endpoint speaking one of the known wire formats."""

    name: str
    base_url: str = ""
    api_key: SecretStr | None = None
    headers: dict[str, str] = {}
    auth_header_name: str = "Authorization"
    auth_header_prefix: str = "Bearer"
    request_format: RequestFormat = RequestFormat.OPENAI
    response_format: ResponseFormat = ResponseFormat.OPENAI
    supported_models: list[str] = []
    default_model: str | None = None
    capabilities: set[AgentCapability] = {AgentCapability.TEXT_GENERATION}
    timeout_seconds: float = 60.0

    def provider_config(self) -> ProviderConfig:
        default_model = self.default_model or (
            self.supported_models[0] if self.supported_models else ""
        )
        return ProviderConfig(
            name=self.name,
            base_url=self.base_url,
            auth_header_name=self.auth_header_name,
            auth_header_prefix=self.auth_header_prefix,
            default_model=default_model,
            supported_models=list(self.supported_models),
            custom_headers=dict(self.headers),
            timeout_seconds=self.timeout_seconds,
        )


def custom_bundle(config: CustomProviderConfig) -> ProviderBundle:
    """Build a bundle for a custom provider.

    An inline ``api_key`` takes precedence over the shared credential store.
    """
    provider = config.provider_config()
    transformer = CustomRequestTransformer(config.request_format)
    parser = CustomResponseParser(config.response_format, provider.default_model or "unknown")

    def _factory(credentials: CredentialStore) -> CompletionBackend:
        store: CredentialStore = credentials
        if config.api_key is not None:
            store = InMemoryCredentialStore(
                {provider.credential_name: config.api_key.get_secret_value()}
            )
        return HTTPExecutionService(provider, transformer, parser, store)

    metadata = ProviderMetadata(
        name=config.name,
        supported_models=list(config.supported_models),
        default_model=provider.default_model,
        capabilities=frozenset(config.capabilities),
    )
    return ProviderBundle(
        metadata=metadata,
        backend_factory=_factory,
        validators=(require_base_url(config.base_url), require_supported_models),
        defaults=AgentDefaults(name=f"{config.name} Agent", role="Custom provider agent"),
        transformer=transformer,
        parser=parser,
    )


def load_custom_providers(path: str | Path) -> list[CustomProviderConfig]:
    """Read custom provider declarations from a YAML file.

    Raises:
        InvalidConfigurationError: On read, YAML or schema errors.
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidConfigurationError(f"cannot read {p}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(os.path.expandvars(raw))
    except yaml.YAMLError as exc:
        raise InvalidConfigurationError(f"YAML parse error: {exc}") from exc

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("providers", [])
    if not isinstance(data, list):
        raise InvalidConfigurationError("providers file must be a list or a 'providers' mapping")

    try:
        return [CustomProviderConfig.model_validate(item) for item in data]
    except ValidationError as exc:
        raise InvalidConfigurationError(str(exc)) from exc
