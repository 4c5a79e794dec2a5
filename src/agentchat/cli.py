"""agentchat CLI entrypoint."""

from __future__ import annotations

import click

from agentchat import __version__


@click.group()
@click.version_option(version=__version__, prog_name="agentchat")
def main() -> None:
    """agentchat: talk to any supported LLM provider."""


# Register subcommands
from agentchat.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
