"""Wire envelopes for workflow execution.

The engine nests JSON inside JSON: the execute request's ``input`` and the
execution's ``output`` are JSON *strings* holding an object. The models
below expose them as :class:`JsonDocument` values and handle the
re-encoding at the boundary.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, field_serializer, field_validator

from agentchat.core.models import JsonDocument

# Output keys checked, in order, for a workflow's human-readable answer.
REPLY_KEYS = ("result", "output", "response", "message", "text", "content")


class WorkflowExecuteRequest(BaseModel):
    workflow_id: str
    input: JsonDocument = JsonDocument()
    wait_for_completion: bool = True

    @field_validator("input", mode="before")
    @classmethod
    def _decode_input(cls, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value) if value.strip() else {}
        return value

    @field_serializer("input")
    def _encode_input(self, value: JsonDocument) -> str:
        return value.encode()


class WorkflowExecution(BaseModel):
    execution_id: str
    status: str
    output: JsonDocument | None = None
    error: str | None = None

    @field_validator("output", mode="before")
    @classmethod
    def _decode_output(cls, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value) if value.strip() else None
        return value

    @field_serializer("output")
    def _encode_output(self, value: JsonDocument | None) -> str | None:
        return value.encode() if value is not None else None

    @property
    def reply_text(self) -> str | None:
        """The first string found under a conventional reply key, if any."""
        if self.output is None:
            return None
        for key in REPLY_KEYS:
            value = self.output.get(key)
            if isinstance(value, str) and value:
                return value
        return None


class WorkflowSummary(BaseModel):
    id: str
    name: str = ""
    active: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value
