"""Workflow-automation provider (n8n)."""

from agentchat.workflows.backend import WorkflowBackend, format_execution, parse_workflow_message
from agentchat.workflows.client import WorkflowClient
from agentchat.workflows.models import WorkflowExecuteRequest, WorkflowExecution, WorkflowSummary
from agentchat.workflows.settings import WorkflowSettings

__all__ = [
    "WorkflowBackend",
    "WorkflowClient",
    "WorkflowExecuteRequest",
    "WorkflowExecution",
    "WorkflowSettings",
    "WorkflowSummary",
    "format_execution",
    "parse_workflow_message",
]
