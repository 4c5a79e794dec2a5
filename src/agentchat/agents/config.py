"""Agent configuration and capability flags."""

from __future__ import annotations

from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class AgentCapability(str, Enum):
    """Features an agent can advertise. Used for gating only."""

    TEXT_GENERATION = "text_generation"
    CODE_GENERATION = "code_generation"
    DATA_ANALYSIS = "data_analysis"
    WEB_SEARCH = "web_search"
    IMAGE_GENERATION = "image_generation"
    WORKFLOW_AUTOMATION = "workflow_automation"
    MEMORY_RETENTION = "memory_retention"
    MULTIMODAL_INPUT = "multimodal_input"
    REALTIME_DATA = "realtime_data"
    COLLABORATION = "collaboration"


class AgentConfiguration(BaseModel):
    """User-editable persona and defaults for one agent.

    The ``id`` is fixed at creation; every other field may be reassigned
    and is re-validated on assignment.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, frozen=True)
    name: str
    system_prompt: str = ""
    personality: str = ""
    role: str = ""
    icon: str = ""
    preferred_provider: str = "openai"
    model: str | None = None
    temperature: float = 0.7
    max_tokens: int = Field(default=2000, gt=0)
    is_active: bool = True
    memory_enabled: bool = True
    context_window: int = Field(default=10, ge=0)
    capabilities: set[AgentCapability] = set()
