"""Built-in provider definitions.

Endpoints, model lists and default personas for every provider shipped with
agentchat, plus a helper to build a pre-loaded :class:`ProviderRegistry`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from agentchat.agents.bundle import (
    AgentDefaults,
    ProviderBundle,
    ProviderMetadata,
    http_bundle,
    require_base_url,
)
from agentchat.agents.config import AgentCapability
from agentchat.agents.registry import ProviderRegistry
from agentchat.assistants.backend import AssistantsBackend
from agentchat.assistants.client import AssistantsClient
from agentchat.assistants.state_machine import CompletionStateMachine, ThreadCache
from agentchat.core.adapters.anthropic import AnthropicRequestTransformer, AnthropicResponseParser
from agentchat.core.adapters.openai import OpenAIRequestTransformer, OpenAIResponseParser
from agentchat.core.errors import InvalidConfigurationError
from agentchat.core.http import ProviderConfig
from agentchat.workflows.backend import WorkflowBackend
from agentchat.workflows.client import WorkflowClient
from agentchat.workflows.settings import WorkflowSettings

if TYPE_CHECKING:
    from agentchat.agents.config import AgentConfiguration
    from agentchat.core.credentials import CredentialStore
    from agentchat.core.protocol import CompletionBackend

_CHAT_CAPABILITIES = frozenset({
    AgentCapability.TEXT_GENERATION,
    AgentCapability.CODE_GENERATION,
    AgentCapability.DATA_ANALYSIS,
})

# ---------------------------------------------------------------------------
# Endpoint configurations
# ---------------------------------------------------------------------------

OPENAI = ProviderConfig(
    name="OpenAI",
    base_url="https://api.openai.com/v1/chat/completions",
    default_model="gpt-4o-mini",
    supported_models=[
        "gpt-4.1", "gpt-4.1-mini", "gpt-4.1-nano",
        "gpt-4o", "gpt-4o-mini",
        "gpt-4.5",
        "o3", "o3-pro",
        "o4-mini", "o4-mini-high",
        "gpt-3.5-turbo",
    ],
    credential_key="openai",
)

ANTHROPIC = ProviderConfig(
    name="Anthropic",
    base_url="https://api.anthropic.com/v1/messages",
    auth_header_name="x-api-key",
    auth_header_prefix="",
    api_version="2023-06-01",
    default_model="claude-sonnet-4-20250514",
    supported_models=[
        "claude-opus-4-20250514",
        "claude-sonnet-4-20250514",
        "claude-3-7-sonnet-20250219",
        "claude-3-5-sonnet-20241022",
        "claude-3-5-haiku-20241022",
        "claude-3-opus-20240229",
        "claude-3-haiku-20240307",
    ],
    credential_key="anthropic",
)

DEEPSEEK = ProviderConfig(
    name="DeepSeek",
    base_url="https://api.deepseek.com/v1/chat/completions",
    default_model="deepseek-v3-0324",
    supported_models=[
        "deepseek-r1-0528", "deepseek-r1", "deepseek-r1-distill-32b", "deepseek-r1-distill-70b",
        "deepseek-v3-0324", "deepseek-v3",
        "deepseek-coder-v2", "deepseek-math",
    ],
    credential_key="deepseek",
)

GROK = ProviderConfig(
    name="Grok",
    base_url="https://api.x.ai/v1/chat/completions",
    default_model="grok-2-1212",
    supported_models=["grok-4", "grok-4-heavy", "grok-3", "grok-2-1212", "grok-beta", "grok-vision-beta"],
    credential_key="grok",
)

MISTRAL = ProviderConfig(
    name="Mistral",
    base_url="https://api.mistral.ai/v1/chat/completions",
    default_model="mistral-medium-2505",
    supported_models=[
        "mistral-medium-2505", "magistral-medium-2506", "codestral-2501",
        "devstral-medium-2507", "mistral-large-2411", "pixtral-large-2411",
        "ministral-8b-2410", "ministral-3b-2410", "magistral-small-2506",
        "mistral-small-2506", "devstral-small-2507", "mistral-nemo-2407",
        "pixtral-12b-2409",
    ],
    credential_key="mistral",
)

PERPLEXITY = ProviderConfig(
    name="Perplexity",
    base_url="https://api.perplexity.ai/chat/completions",
    default_model="sonar-pro",
    supported_models=[
        "sonar-reasoning-pro", "sonar-reasoning", "sonar-pro", "sonar", "sonar-deep-research",
        "r1-1776",
    ],
    credential_key="perplexity",
)

# ---------------------------------------------------------------------------
# Default personas
# ---------------------------------------------------------------------------

DEFAULT_AGENTS: dict[str, AgentDefaults] = {
    "openai": AgentDefaults(
        name="OpenAI Assistant",
        system_prompt="You are a helpful AI assistant powered by OpenAI.",
        personality="helpful and versatile",
        role="AI assistant",
        icon="🤖",
    ),
    "anthropic": AgentDefaults(
        name="Claude Assistant",
        system_prompt=(
            "You are Claude, an AI assistant created by Anthropic. "
            "You are helpful, harmless, and honest."
        ),
        personality="helpful, harmless, and honest",
        role="AI assistant",
        icon="🤖",
    ),
    "deepseek": AgentDefaults(
        name="DeepSeek Assistant",
        system_prompt=(
            "You are DeepSeek, an AI assistant with strong reasoning and coding capabilities. "
            "You excel at complex problem-solving, mathematics, and programming tasks."
        ),
        personality="Analytical, precise, and methodical",
        role="AI assistant",
        icon="🧠",
    ),
    "grok": AgentDefaults(
        name="Grok Assistant",
        system_prompt=(
            "You are Grok, an AI assistant created by xAI. You have access to real-time "
            "information and can provide up-to-date responses."
        ),
        personality="Witty, informative, real-time aware",
        role="AI assistant",
        icon="🤖",
    ),
    "mistral": AgentDefaults(
        name="Mistral Assistant",
        system_prompt="You are a helpful AI assistant powered by Mistral AI.",
        personality="helpful and analytical",
        role="AI assistant",
        icon="🧠",
    ),
    "perplexity": AgentDefaults(
        name="Perplexity Assistant",
        system_prompt=(
            "You are a helpful AI assistant powered by Perplexity AI. You have access to "
            "real-time web search and can provide up-to-date information from the internet."
        ),
        personality="Informative and precise",
        role="Research assistant",
        icon="🔍",
    ),
    "openai-assistants": AgentDefaults(
        name="OpenAI Assistant (threads)",
        personality="helpful and versatile",
        role="AI assistant",
        icon="🧵",
    ),
    "n8n": AgentDefaults(
        name="N8N Workflow Agent",
        system_prompt=(
            "You are an N8N workflow automation agent. You can execute workflows, "
            "manage automations, and integrate with various services."
        ),
        personality="Efficient and automated",
        role="Automation agent",
        icon="⚙️",
    ),
}

# ---------------------------------------------------------------------------
# Bundles that are not plain request/response HTTP
# ---------------------------------------------------------------------------


def require_assistant_id(configuration: AgentConfiguration, metadata: ProviderMetadata) -> None:
    if not (configuration.model or metadata.default_model).strip():
        raise InvalidConfigurationError(f"{metadata.name} needs an assistant id as the model")


def assistants_bundle(*, base_url: str | None = None) -> ProviderBundle:
    """Thread-based assistants. The agent's model is the assistant id.

    Every backend built from one bundle shares its conversation threads.
    """
    threads = ThreadCache()

    def _factory(credentials: CredentialStore) -> CompletionBackend:
        if base_url is None:
            client = AssistantsClient(credentials)
        else:
            client = AssistantsClient(credentials, base_url=base_url)
        return AssistantsBackend(CompletionStateMachine(client, threads=threads))

    return ProviderBundle(
        metadata=ProviderMetadata(
            name="OpenAI Assistants",
            default_model="",
            capabilities=frozenset({
                AgentCapability.TEXT_GENERATION,
                AgentCapability.CODE_GENERATION,
                AgentCapability.DATA_ANALYSIS,
                AgentCapability.MEMORY_RETENTION,
                AgentCapability.COLLABORATION,
            }),
        ),
        backend_factory=_factory,
        validators=(require_assistant_id,),
        defaults=DEFAULT_AGENTS["openai-assistants"],
    )


def workflow_bundle(settings: WorkflowSettings | None = None) -> ProviderBundle:
    """n8n workflow automation. Settings come from ``N8N_*`` when omitted."""
    resolved = settings or WorkflowSettings()

    def _factory(credentials: CredentialStore) -> CompletionBackend:
        return WorkflowBackend(WorkflowClient(resolved))

    return ProviderBundle(
        metadata=ProviderMetadata(
            name="N8N",
            supported_models=["n8n-workflow"],
            default_model="n8n-workflow",
            capabilities=frozenset({
                AgentCapability.WORKFLOW_AUTOMATION,
                AgentCapability.COLLABORATION,
            }),
        ),
        backend_factory=_factory,
        validators=(require_base_url(resolved.base_url),),
        defaults=DEFAULT_AGENTS["n8n"],
    )


def build_default_registry(
    *, workflow_settings: WorkflowSettings | None = None
) -> ProviderRegistry:
    """Create a :class:`ProviderRegistry` pre-loaded with every built-in provider."""
    registry = ProviderRegistry()
    registry.register(
        "openai",
        http_bundle(
            OPENAI,
            OpenAIRequestTransformer(),
            OpenAIResponseParser(OPENAI.default_model),
            capabilities=frozenset({
                *_CHAT_CAPABILITIES,
                AgentCapability.MEMORY_RETENTION,
                AgentCapability.COLLABORATION,
                AgentCapability.MULTIMODAL_INPUT,
            }),
            defaults=DEFAULT_AGENTS["openai"],
        ),
    )
    registry.register(
        "anthropic",
        http_bundle(
            ANTHROPIC,
            AnthropicRequestTransformer(),
            AnthropicResponseParser(ANTHROPIC.default_model),
            capabilities=_CHAT_CAPABILITIES,
            defaults=DEFAULT_AGENTS["anthropic"],
        ),
    )
    registry.register(
        "deepseek",
        http_bundle(
            DEEPSEEK,
            OpenAIRequestTransformer(extra_fields={"stream": False}),
            OpenAIResponseParser(DEEPSEEK.default_model),
            capabilities=_CHAT_CAPABILITIES,
            defaults=DEFAULT_AGENTS["deepseek"],
        ),
    )
    for key, config in (("grok", GROK), ("mistral", MISTRAL), ("perplexity", PERPLEXITY)):
        registry.register(
            key,
            http_bundle(
                config,
                OpenAIRequestTransformer(),
                OpenAIResponseParser(config.default_model),
                capabilities=_CHAT_CAPABILITIES,
                defaults=DEFAULT_AGENTS[key],
            ),
        )
    registry.register("openai-assistants", assistants_bundle())
    registry.register("n8n", workflow_bundle(workflow_settings))
    return registry
