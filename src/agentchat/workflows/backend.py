"""Exposes workflow execution through the completion backend protocol.

The user's message selects the workflow. It is either a JSON object::

    {"workflowId": "wf-1", "input": {"topic": "cats"}, "waitForCompletion": true}

or, when it is not such an object, the trimmed text is the workflow id.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from agentchat.core.cancellation import guarded
from agentchat.core.errors import TransformError
from agentchat.core.models import JsonDocument, TokenUsage, UnifiedChatResponse

if TYPE_CHECKING:
    from agentchat.core.cancellation import CancellationToken
    from agentchat.core.models import UnifiedChatRequest
    from agentchat.workflows.client import WorkflowClient
    from agentchat.workflows.models import WorkflowExecution

logger = logging.getLogger(__name__)


def parse_workflow_message(message: str) -> tuple[str, JsonDocument, bool]:
    """Split a chat message into ``(workflow_id, input, wait_for_completion)``."""
    try:
        data: Any = json.loads(message)
    except ValueError:
        data = None

    if isinstance(data, dict) and isinstance(data.get("workflowId"), str):
        raw_input = data.get("input")
        wait = data.get("waitForCompletion")
        return (
            data["workflowId"],
            JsonDocument(raw_input if isinstance(raw_input, dict) else {}),
            wait if isinstance(wait, bool) else True,
        )
    return message.strip(), JsonDocument(), True


def format_execution(execution: WorkflowExecution) -> str:
    """Render an execution record as reply text."""
    reply = execution.reply_text
    if reply is not None:
        return reply

    lines = [
        "Workflow executed successfully",
        f"Execution ID: {execution.execution_id}",
        f"Status: {execution.status}",
    ]
    if execution.error:
        lines.append(f"Error: {execution.error}")
    if execution.output is not None:
        lines.append(f"Output: {execution.output.encode()}")
    return "\n".join(lines)


class WorkflowBackend:
    """Runs the workflow named by the newest user message."""

    def __init__(self, client: WorkflowClient) -> None:
        self.client = client

    async def complete(
        self,
        request: UnifiedChatRequest,
        *,
        conversation_id: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> UnifiedChatResponse:
        text = next(
            (m.content for m in reversed(request.messages) if m.role == "user"), ""
        )
        workflow_id, payload, wait = parse_workflow_message(text)
        if not workflow_id:
            raise TransformError("message does not name a workflow")

        logger.debug("Executing workflow %s (wait=%s)", workflow_id, wait)
        execution = await guarded(
            self.client.execute(workflow_id, payload, wait_for_completion=wait), cancel_token
        )
        return UnifiedChatResponse(
            content=format_execution(execution),
            model=request.model,
            usage=TokenUsage(),
        )
