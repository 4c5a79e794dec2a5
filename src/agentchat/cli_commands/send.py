"""``agentchat send`` / ``agentchat validate``: talk to one provider."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from agentchat.cli_commands._output import console, load_registry

_CUSTOM_OPTION = click.option(
    "--custom",
    "custom_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML file declaring custom providers.",
)


@click.command()
@click.argument("provider")
@click.argument("message")
@click.option("--model", "-m", default=None, help="Model (or assistant id) to use.")
@click.option("--system", "-s", "system_prompt", default=None, help="Override the system prompt.")
@click.option("--conversation", "-c", default=None, help="Conversation id for thread reuse.")
@_CUSTOM_OPTION
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--telemetry", is_flag=True, help="Export trace spans to the console.")
def send(
    provider: str,
    message: str,
    model: str | None,
    system_prompt: str | None,
    conversation: str | None,
    custom_file: str | None,
    verbose: bool,
    telemetry: bool,
) -> None:
    """Send MESSAGE to PROVIDER and print the reply.

    API keys are read from ``<PROVIDER>_API_KEY`` environment variables.
    """
    from agentchat.agents.facade import AgentFacade
    from agentchat.core.credentials import EnvCredentialStore

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    if telemetry:
        from agentchat.utils.telemetry import configure_telemetry

        configure_telemetry()

    try:
        bundle = load_registry(custom_file).get(provider)
    except Exception as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    agent = AgentFacade(bundle, credentials=EnvCredentialStore())
    if system_prompt is not None:
        agent.configuration.system_prompt = system_prompt

    try:
        reply = asyncio.run(agent.send_message(message, model, conversation_id=conversation))
    except Exception as exc:
        console.print(f"[red]Request failed:[/red] {exc}")
        sys.exit(1)

    console.print(reply, markup=False, highlight=False)


@click.command()
@click.argument("provider")
@_CUSTOM_OPTION
@click.option("--model", "-m", default=None, help="Model (or assistant id) to validate with.")
def validate(provider: str, custom_file: str | None, model: str | None) -> None:
    """Check PROVIDER's default agent configuration."""
    from agentchat.agents.facade import AgentFacade
    from agentchat.core.credentials import EnvCredentialStore

    try:
        bundle = load_registry(custom_file).get(provider)
        AgentFacade(bundle, credentials=EnvCredentialStore()).validate_configuration(model)
    except Exception as exc:
        console.print(f"[red]Invalid:[/red] {exc}")
        sys.exit(1)

    console.print(f"[green]{bundle.metadata.name} configuration is valid.[/green]")
