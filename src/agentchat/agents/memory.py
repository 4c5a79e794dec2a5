"""Agent memory hand-off.

After a successful reply an agent offers the text to a :class:`MemoryStore`,
and can later load or clear what it remembered for a conversation.
Persistence is the store's business; :class:`InMemoryMemoryStore` is a
dict-based implementation suitable for tests and single-process use.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class MemoryKind(str, Enum):
    USER_PREFERENCE = "user_preference"
    CONVERSATION_CONTEXT = "conversation_context"
    FACTUAL_INFORMATION = "factual_information"
    PERSONAL_DETAIL = "personal_detail"
    TASK_HISTORY = "task_history"
    ERROR_PATTERN = "error_pattern"
    SUCCESS_PATTERN = "success_pattern"


class MemoryEntry(BaseModel):
    """One remembered item."""

    id: UUID = Field(default_factory=uuid4)
    agent_id: UUID
    conversation_id: str | None = None
    content: str
    kind: MemoryKind
    metadata: dict[str, Any] = {}
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


@runtime_checkable
class MemoryStore(Protocol):
    """Async store for agent memories."""

    async def save_memory(
        self,
        agent_id: UUID,
        conversation_id: str | None,
        content: str,
        kind: MemoryKind,
        metadata: dict[str, Any],
    ) -> None:
        """Persist one memory. Implementations must tolerate concurrent calls."""
        ...

    async def load_memories(
        self,
        agent_id: UUID,
        *,
        kind: MemoryKind | None = None,
        conversation_id: str | None = None,
    ) -> list[MemoryEntry]:
        """Entries for *agent_id*, oldest first, optionally filtered."""
        ...

    async def clear_memories(self, agent_id: UUID, *, conversation_id: str | None = None) -> None:
        """Forget *agent_id*'s memories, or only those of one conversation."""
        ...


class InMemoryMemoryStore:
    """Dict-backed :class:`MemoryStore` keyed by agent id."""

    def __init__(self) -> None:
        self._entries: dict[UUID, list[MemoryEntry]] = {}
        self._lock = asyncio.Lock()

    async def save_memory(
        self,
        agent_id: UUID,
        conversation_id: str | None,
        content: str,
        kind: MemoryKind,
        metadata: dict[str, Any],
    ) -> None:
        entry = MemoryEntry(
            agent_id=agent_id,
            conversation_id=conversation_id,
            content=content,
            kind=kind,
            metadata=dict(metadata),
        )
        async with self._lock:
            self._entries.setdefault(agent_id, []).append(entry)

    async def load_memories(
        self,
        agent_id: UUID,
        *,
        kind: MemoryKind | None = None,
        conversation_id: str | None = None,
    ) -> list[MemoryEntry]:
        async with self._lock:
            entries = list(self._entries.get(agent_id, []))
        if kind is not None:
            entries = [e for e in entries if e.kind is kind]
        if conversation_id is not None:
            entries = [e for e in entries if e.conversation_id == conversation_id]
        return entries

    async def clear_memories(self, agent_id: UUID, *, conversation_id: str | None = None) -> None:
        async with self._lock:
            if conversation_id is None:
                self._entries.pop(agent_id, None)
                return
            kept = [
                e for e in self._entries.get(agent_id, []) if e.conversation_id != conversation_id
            ]
            if kept:
                self._entries[agent_id] = kept
            else:
                self._entries.pop(agent_id, None)
