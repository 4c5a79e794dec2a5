"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from agentchat.cli_commands.providers import providers
    from agentchat.cli_commands.send import send, validate
    from agentchat.cli_commands.workflows import workflows

    cli.add_command(providers)
    cli.add_command(send)
    cli.add_command(validate)
    cli.add_command(workflows)
