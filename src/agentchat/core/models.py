"""Unified message model shared by every provider adapter.

Callers build a :class:`UnifiedChatRequest` once and every backend maps it
to its own wire format. Responses come back as :class:`UnifiedChatResponse`
regardless of which provider produced them.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, RootModel

Role = Literal["user", "assistant", "system"]

# ---------------------------------------------------------------------------
# Request side
# ---------------------------------------------------------------------------


class ChatMessage(BaseModel):
    """A single turn in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> ChatMessage:
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> ChatMessage:
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> ChatMessage:
        return cls(role="assistant", content=content)


class RequestParameters(BaseModel):
    """Sampling parameters. ``None`` means "use the provider default".

    Values are passed through untouched; range checking is the provider's job.
    """

    model_config = ConfigDict(frozen=True)

    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None


class UnifiedChatRequest(BaseModel):
    """A provider-independent chat completion request."""

    model_config = ConfigDict(frozen=True)

    model: str
    messages: list[ChatMessage] = []
    parameters: RequestParameters = RequestParameters()

    @property
    def leading_system_message(self) -> ChatMessage | None:
        """The system message honoured by providers with a top-level system slot."""
        if self.messages and self.messages[0].role == "system":
            return self.messages[0]
        return None

    @property
    def conversation_messages(self) -> list[ChatMessage]:
        """Messages after the leading system message, in order."""
        if self.leading_system_message is not None:
            return list(self.messages[1:])
        return list(self.messages)


# ---------------------------------------------------------------------------
# Response side
# ---------------------------------------------------------------------------


class TokenUsage(BaseModel):
    """Token accounting as reported by the provider.

    ``total_tokens`` stays ``None`` unless the provider reported it; it is
    never computed from the other two counts.
    """

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int | None = None


class UnifiedChatResponse(BaseModel):
    """A provider-independent chat completion result."""

    model_config = ConfigDict(frozen=True)

    content: str
    model: str
    usage: TokenUsage = TokenUsage()


# ---------------------------------------------------------------------------
# Dynamic JSON
# ---------------------------------------------------------------------------


class JsonDocument(RootModel[dict[str, Any]]):
    """An arbitrary JSON object whose key order is preserved.

    Used where a payload travels as a JSON string embedded inside another
    JSON document (workflow inputs and outputs).
    """

    root: dict[str, Any] = {}

    def encode(self) -> str:
        """Serialize to a compact JSON string."""
        return json.dumps(self.root, separators=(",", ":"), ensure_ascii=False)

    @classmethod
    def decode(cls, raw: str) -> JsonDocument:
        """Parse a JSON string holding an object."""
        return cls.model_validate(json.loads(raw))

    def get(self, key: str, default: Any = None) -> Any:
        return self.root.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.root[key]

    def __contains__(self, key: object) -> bool:
        return key in self.root

    def __len__(self) -> int:
        return len(self.root)
