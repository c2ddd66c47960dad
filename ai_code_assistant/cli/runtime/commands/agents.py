"""Commands for managing agent profiles."""

from __future__ import annotations

from typing import Optional

import click

from .._compat import get_cli_state


@click.group(name="agents", short_help="Manage agent profiles.")
def agents_group() -> None:
    """List, create, remove and activate agent profiles."""


@agents_group.command(name="list")
@click.pass_context
def list_agents(ctx: click.Context) -> None:
    manager = get_cli_state(ctx).agents
    active_id = manager.get_active_agent_id()
    for agent in manager.get_agents():
        marker = "*" if agent.id == active_id else " "
        description = f" - {agent.description}" if agent.description else ""
        click.echo(f"{marker} {agent.id}  {agent.name}{description}")


@agents_group.command(name="use")
@click.argument("agent_id")
@click.pass_context
def use_agent(ctx: click.Context, agent_id: str) -> None:
    """Make AGENT_ID the active profile."""
    try:
        agent = get_cli_state(ctx).agents.set_active_agent(agent_id)
    except KeyError as exc:
        raise click.ClickException(str(exc.args[0])) from exc
    click.echo(f"Active agent: {agent.name}")


@agents_group.command(name="add")
@click.argument("name")
@click.option("--prompt", "system_prompt", required=True, help="System prompt for the agent.")
@click.option("--description", default="", help="Short description.")
@click.option("--icon", default=None, help="Optional icon name.")
@click.pass_context
def add_agent(
    ctx: click.Context, name: str, system_prompt: str, description: str, icon: Optional[str]
) -> None:
    """Create a new agent profile."""
    agent = get_cli_state(ctx).agents.create_agent(
        name, system_prompt, description=description, icon=icon
    )
    click.echo(f"Created agent {agent.id} ({agent.name})")


@agents_group.command(name="remove")
@click.argument("agent_id")
@click.pass_context
def remove_agent(ctx: click.Context, agent_id: str) -> None:
    if not get_cli_state(ctx).agents.delete_agent(agent_id):
        raise click.ClickException(f"Agent '{agent_id}' does not exist")
    click.echo(f"Removed agent {agent_id}")
