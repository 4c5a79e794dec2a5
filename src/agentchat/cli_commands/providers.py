"""``agentchat providers``: list registered providers."""

from __future__ import annotations

import sys

import click

from agentchat.cli_commands._output import (
    console,
    load_registry,
    print_providers_json,
    print_providers_table,
)


@click.group()
def providers() -> None:
    """Inspect available providers."""


@providers.command("list")
@click.option(
    "--custom",
    "custom_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file declaring custom providers.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def list_providers(custom_file: str | None, fmt: str) -> None:
    """List built-in and custom providers."""
    try:
        registry = load_registry(custom_file)
    except Exception as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    entries = list(zip(registry.keys(), registry.bundles()))
    if fmt == "json":
        print_providers_json(entries)
    else:
        print_providers_table(entries)
