"""Thread-based asynchronous completions (OpenAI Assistants API)."""

from agentchat.assistants.backend import AssistantsBackend
from agentchat.assistants.client import AssistantsClient
from agentchat.assistants.models import MessageList, RunResponse, RunStatus, ThreadMessage
from agentchat.assistants.state_machine import CompletionStateMachine, ThreadCache

__all__ = [
    "AssistantsBackend",
    "AssistantsClient",
    "CompletionStateMachine",
    "MessageList",
    "RunResponse",
    "RunStatus",
    "ThreadCache",
    "ThreadMessage",
]
