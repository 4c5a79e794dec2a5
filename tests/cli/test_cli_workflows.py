"""Tests for ``agentchat workflows``."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from agentchat.cli import main
from agentchat.core.errors import ServerError
from agentchat.core.models import JsonDocument
from agentchat.workflows.models import WorkflowExecution, WorkflowSummary

_CLIENT = "agentchat.workflows.client.WorkflowClient"


class TestWorkflowsList:
    def test_list(self) -> None:
        items = [WorkflowSummary(id="7", name="Blog writer", active=True)]
        with patch(f"{_CLIENT}.list_workflows", new_callable=AsyncMock, return_value=items):
            runner = CliRunner()
            result = runner.invoke(main, ["workflows", "list"])

        assert result.exit_code == 0
        assert "Blog writer" in result.output
        assert "yes" in result.output

    def test_empty(self) -> None:
        with patch(f"{_CLIENT}.list_workflows", new_callable=AsyncMock, return_value=[]):
            runner = CliRunner()
            result = runner.invoke(main, ["workflows", "list"])

        assert result.exit_code == 0
        assert "No workflows found" in result.output

    def test_failure(self) -> None:
        with patch(
            f"{_CLIENT}.list_workflows",
            new_callable=AsyncMock,
            side_effect=ServerError("down", 503),
        ):
            runner = CliRunner()
            result = runner.invoke(main, ["workflows", "list"])

        assert result.exit_code == 1
        assert "Request failed" in result.output


class TestWorkflowsStatus:
    def test_status(self) -> None:
        execution = WorkflowExecution(
            execution_id="ex-1",
            status="error",
            output=JsonDocument({"step": 2}),
            error="node failed",
        )
        with patch(
            f"{_CLIENT}.get_execution", new_callable=AsyncMock, return_value=execution
        ) as get:
            runner = CliRunner()
            result = runner.invoke(main, ["workflows", "status", "ex-1"])

        assert result.exit_code == 0
        assert "Execution ex-1" in result.output
        assert "node failed" in result.output
        assert '"step"' in result.output
        get.assert_awaited_once_with("ex-1")
