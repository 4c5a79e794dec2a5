"""``agentchat workflows``: inspect the n8n workflow engine."""

from __future__ import annotations

import asyncio
import sys

import click

from agentchat.cli_commands._output import console, print_execution, print_workflows_table


@click.group()
def workflows() -> None:
    """Inspect workflows on the configured n8n instance (``N8N_BASE_URL``)."""


@workflows.command("list")
def list_workflows() -> None:
    """List workflows defined on the engine."""
    from agentchat.workflows.client import WorkflowClient

    try:
        items = asyncio.run(WorkflowClient().list_workflows())
    except Exception as exc:
        console.print(f"[red]Request failed:[/red] {exc}")
        sys.exit(1)

    if not items:
        console.print("[yellow]No workflows found.[/yellow]")
        return
    print_workflows_table(items)


@workflows.command("status")
@click.argument("execution_id")
def status(execution_id: str) -> None:
    """Show the status of EXECUTION_ID."""
    from agentchat.workflows.client import WorkflowClient

    try:
        execution = asyncio.run(WorkflowClient().get_execution(execution_id))
    except Exception as exc:
        console.print(f"[red]Request failed:[/red] {exc}")
        sys.exit(1)

    print_execution(execution)
