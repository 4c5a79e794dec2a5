"""Envelopes for the thread-based Assistants API.

Only the fields the completion flow reads are modelled; everything else in
the provider's responses is ignored.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"


# Statuses after which the run will never produce a reply.
TERMINAL_FAILURE_STATUSES = frozenset({
    RunStatus.FAILED.value,
    RunStatus.CANCELLED.value,
    RunStatus.EXPIRED.value,
    RunStatus.INCOMPLETE.value,
})


class ThreadResponse(BaseModel):
    id: str


class MessageResponse(BaseModel):
    id: str


class RunResponse(BaseModel):
    """A run snapshot. ``status`` stays a plain string so unknown values
    from newer API versions are treated as "still running"."""

    id: str
    status: str
    thread_id: str | None = None
    assistant_id: str | None = None


class TextValue(BaseModel):
    value: str


class MessageContent(BaseModel):
    type: str
    text: TextValue | None = None


class ThreadMessage(BaseModel):
    id: str
    role: str
    content: list[MessageContent] = []
    run_id: str | None = None

    def first_text(self) -> str | None:
        for block in self.content:
            if block.type == "text" and block.text is not None:
                return block.text.value
        return None


class MessageList(BaseModel):
    data: list[ThreadMessage] = []

    def reply_for_run(self, run_id: str) -> str | None:
        """Text of the first assistant message produced by *run_id*.

        Only that message is read; without a text block the reply is not ready.
        """
        for message in self.data:
            if message.role == "assistant" and message.run_id == run_id:
                return message.first_text()
        return None
