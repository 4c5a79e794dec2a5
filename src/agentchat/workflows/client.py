"""WorkflowClient: execute and inspect workflows on an n8n instance."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from agentchat.core.errors import InvalidFormatError, NetworkError
from agentchat.core.http import raise_for_status
from agentchat.core.models import JsonDocument
from agentchat.utils.telemetry import ATTR_WORKFLOW_ID, get_tracer
from agentchat.workflows.models import WorkflowExecuteRequest, WorkflowExecution, WorkflowSummary
from agentchat.workflows.settings import WorkflowSettings

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class WorkflowClient:
    """Thin async client over the workflow engine's REST API.

    Usage::

        client = WorkflowClient(WorkflowSettings())
        execution = await client.execute("wf-1", JsonDocument({"topic": "cats"}))
    """

    def __init__(
        self,
        settings: WorkflowSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or WorkflowSettings()
        self._client = client

    def build_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key is not None:
            headers["Authorization"] = f"Bearer {self.settings.api_key.get_secret_value()}"
        return headers

    async def execute(
        self,
        workflow_id: str,
        payload: JsonDocument | dict[str, Any] | None = None,
        *,
        wait_for_completion: bool = True,
    ) -> WorkflowExecution:
        """POST ``/workflows/{id}/execute`` and return the execution record."""
        document = payload if isinstance(payload, JsonDocument) else JsonDocument(payload or {})
        request = WorkflowExecuteRequest(
            workflow_id=workflow_id,
            input=document,
            wait_for_completion=wait_for_completion,
        )
        with _tracer.start_as_current_span("workflow.execute") as span:
            span.set_attribute(ATTR_WORKFLOW_ID, workflow_id)
            data = await self._request(
                "POST",
                f"/workflows/{workflow_id}/execute",
                request.model_dump(mode="json"),
            )
        return _parse_execution(data)

    async def list_workflows(self) -> list[WorkflowSummary]:
        """GET ``/workflows``. Accepts a bare list or a ``{"data": [...]}`` page."""
        data = await self._request("GET", "/workflows")
        items = data.get("data", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise InvalidFormatError("workflow list is not an array")
        try:
            return [WorkflowSummary.model_validate(item) for item in items]
        except ValidationError as exc:
            raise InvalidFormatError(str(exc)) from exc

    async def get_execution(self, execution_id: str) -> WorkflowExecution:
        """GET ``/executions/{id}``."""
        data = await self._request("GET", f"/executions/{execution_id}")
        return _parse_execution(data)

    async def _request(
        self, method: str, path: str, body: dict[str, Any] | None = None
    ) -> Any:
        url = f"{self.settings.api_root}{path}"
        headers = self.build_headers()
        logger.debug("Workflow API %s %s", method, url)
        try:
            if self._client is not None:
                response = await self._client.request(method, url, headers=headers, json=body)
            else:
                async with httpx.AsyncClient(timeout=self.settings.timeout_seconds) as client:
                    response = await client.request(method, url, headers=headers, json=body)
        except httpx.HTTPError as exc:
            raise NetworkError(exc) from exc

        raise_for_status(response)
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidFormatError(str(exc)) from exc


def _parse_execution(data: Any) -> WorkflowExecution:
    try:
        return WorkflowExecution.model_validate(data)
    except ValidationError as exc:
        raise InvalidFormatError(str(exc)) from exc
