"""Shared CLI output formatters and registry loading."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from agentchat.agents.bundle import ProviderBundle
    from agentchat.agents.registry import ProviderRegistry
    from agentchat.workflows.models import WorkflowExecution, WorkflowSummary

console = Console()


def load_registry(custom_file: str | None) -> ProviderRegistry:
    """Built-in providers plus any declared in *custom_file*."""
    from agentchat.agents.custom import load_custom_providers
    from agentchat.agents.registry_data import build_default_registry

    registry = build_default_registry()
    if custom_file:
        for config in load_custom_providers(custom_file):
            registry.register_custom(config)
    return registry


def print_providers_table(entries: list[tuple[str, ProviderBundle]]) -> None:
    """Pretty-print registered providers as a table."""
    table = Table(title="Providers")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Default model")
    table.add_column("Models")
    table.add_column("Capabilities")

    for key, bundle in entries:
        meta = bundle.metadata
        table.add_row(
            key,
            meta.name,
            meta.default_model or "-",
            str(len(meta.supported_models)),
            _truncate(", ".join(sorted(c.value for c in meta.capabilities)), 60),
        )

    console.print(table)


def print_providers_json(entries: list[tuple[str, ProviderBundle]]) -> None:
    data = {
        key: {
            "name": bundle.metadata.name,
            "default_model": bundle.metadata.default_model,
            "supported_models": bundle.metadata.supported_models,
            "capabilities": sorted(c.value for c in bundle.metadata.capabilities),
        }
        for key, bundle in entries
    }
    console.print_json(json.dumps(data))


def print_workflows_table(workflows: list[WorkflowSummary]) -> None:
    table = Table(title="Workflows")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Active")

    for wf in workflows:
        table.add_row(wf.id, _truncate(wf.name), "yes" if wf.active else "no")

    console.print(table)


def print_execution(execution: WorkflowExecution) -> None:
    console.print(f"[bold]Execution {execution.execution_id}[/bold]")
    console.print(f"  Status: {execution.status}")
    if execution.error:
        console.print(f"  [red]Error:[/red] {execution.error}")
    if execution.output is not None:
        console.print_json(execution.output.encode())


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
