"""Group commands — list, create, delete, assign and remove agents."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console
from rich.prompt import Confirm

from wazuh_console.client.api import WazuhAPI
from wazuh_console.client.errors import error_handler
from wazuh_console.commands._common import (
    FormatOpt,
    PasswordOpt,
    ProfileOpt,
    UrlOpt,
    UsernameOpt,
    make_gateway,
    report,
    run_pipeline,
)
from wazuh_console.output.formatter import output

app = typer.Typer(name="groups", help="Manage agent groups.")
console = Console()

GroupArg = Annotated[str, typer.Argument(help="Group name")]
AgentIdsArg = Annotated[list[str], typer.Argument(help="Agent IDs")]


@app.command("list")
@error_handler
def list_groups(
    query: Annotated[str | None, typer.Option("--filter", "-q", help="Substring of the group name")] = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List agent groups."""
    with make_gateway(profile, url, username, password) as gw:
        groups = WazuhAPI(gw).get_groups().affected_items
    if query:
        groups = [g for g in groups if query.lower() in g.name.lower()]
    rows = [[g.name, g.count] for g in groups]
    output(groups, fmt, columns=["Name", "Agents"], rows=rows, title="Groups")


@app.command()
@error_handler
def create(
    group_id: GroupArg,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Create a group."""
    with make_gateway(profile, url, username, password) as gw:
        state = run_pipeline(gw, lambda p: p.create_group(group_id))
    if not report(state):
        raise typer.Exit(1)


@app.command()
@error_handler
def delete(
    group_id: GroupArg,
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Delete a group. Its agents stay registered."""
    if not force and not Confirm.ask(f"Delete group '{group_id}'?"):
        console.print("Cancelled.")
        return
    with make_gateway(profile, url, username, password) as gw:
        state = run_pipeline(gw, lambda p: p.delete_group(group_id))
    if not report(state):
        raise typer.Exit(1)


@app.command()
@error_handler
def assign(
    group_id: GroupArg,
    agent_ids: AgentIdsArg,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Assign agents to a group."""
    with make_gateway(profile, url, username, password) as gw:
        state = run_pipeline(gw, lambda p: p.assign_agents(group_id, agent_ids))
    if not report(state):
        raise typer.Exit(1)


@app.command()
@error_handler
def remove(
    group_id: GroupArg,
    agent_ids: AgentIdsArg,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Remove agents from a group."""
    with make_gateway(profile, url, username, password) as gw:
        state = run_pipeline(gw, lambda p: p.remove_agents(group_id, agent_ids))
    if not report(state):
        raise typer.Exit(1)
