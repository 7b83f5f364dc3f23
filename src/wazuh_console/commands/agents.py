"""Agent commands — list, summary, inventory, config, restart, upgrade."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

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
from wazuh_console.config.constants import (
    AGENT_PAGE_LIMIT,
    CONFIG_COMPONENTS,
    DEFAULT_CONFIG_COMPONENT,
)
from wazuh_console.filters.agent_filter import AgentFilter
from wazuh_console.output.formatter import output
from wazuh_console.output.tables import styled_status
from wazuh_console.pipeline.state import AppState, SortColumn, SortOrder

app = typer.Typer(name="agents", help="Browse and manage agents.")
console = Console()

ComponentOpt = Annotated[
    str,
    typer.Option("--component", "-c", help=f"Config component ({', '.join(CONFIG_COMPONENTS)}, ...)"),
]
AgentIdsArg = Annotated[list[str], typer.Argument(help="Agent IDs")]


@app.command("list")
@error_handler
def list_agents(
    group: Annotated[str | None, typer.Option("--group", "-g", help="Only agents in this group")] = None,
    query: Annotated[
        str | None,
        typer.Option("--filter", "-q", help="Filter, e.g. 'name:web st:active os:ubuntu'"),
    ] = None,
    sort: Annotated[SortColumn, typer.Option("--sort", help="Sort column")] = SortColumn.ID,
    desc: Annotated[bool, typer.Option("--desc", help="Sort descending")] = False,
    limit: Annotated[int, typer.Option("--limit", help="Max agents to fetch")] = AGENT_PAGE_LIMIT,
    offset: Annotated[int, typer.Option("--offset", help="Offset for pagination")] = 0,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List agents, optionally filtered with the operator query language."""
    with make_gateway(profile, url, username, password) as gw:
        page = WazuhAPI(gw).list_agents(group, offset, limit)
    state = AppState(
        agents=page.affected_items,
        sort_column=sort,
        sort_order=SortOrder.DESC if desc else SortOrder.ASC,
        agent_filter=AgentFilter.parse(query or ""),
    )
    state.sort_agents()
    agents = state.visible_agents()
    columns = ["ID", "Name", "IP", "Status", "OS", "Version", "Groups"]
    rows = [
        [
            a.id,
            a.name,
            a.ip,
            styled_status(a.status),
            a.os_name,
            a.version,
            ",".join(a.group or []),
        ]
        for a in agents
    ]
    title = f"Agents ({len(agents)} of {page.total_affected_items})"
    output(agents, fmt, columns=columns, rows=rows, title=title)


@app.command()
@error_handler
def summary(
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Count agents by connection status."""
    with make_gateway(profile, url, username, password) as gw:
        data = WazuhAPI(gw).get_summary()
    output(data, fmt, kv=True, title="Agent Summary")


@app.command()
@error_handler
def hardware(
    agent_id: Annotated[str, typer.Argument(help="Agent ID")],
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show CPU, memory and board details of an agent."""
    with make_gateway(profile, url, username, password) as gw:
        items = WazuhAPI(gw).get_hardware_info(agent_id).affected_items
    if not items:
        console.print(f"[yellow]No hardware inventory for agent {agent_id}.[/]")
        return
    hw = items[0]
    if fmt != "table":
        output(hw, fmt)
        return
    output(
        {
            "CPU": hw.cpu.name,
            "Cores": hw.cpu.cores,
            "MHz": hw.cpu.mhz,
            "RAM total (KB)": hw.ram.total,
            "RAM free (KB)": hw.ram.free,
            "RAM usage (%)": hw.ram.usage,
            "Board serial": hw.board_serial,
            "Scanned": hw.scan.time if hw.scan else None,
        },
        fmt,
        kv=True,
        title=f"Hardware: {agent_id}",
    )


@app.command()
@error_handler
def processes(
    agent_id: Annotated[str, typer.Argument(help="Agent ID")],
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List processes running on an agent."""
    with make_gateway(profile, url, username, password) as gw:
        items = WazuhAPI(gw).get_processes(agent_id).affected_items
    rows = [[p.pid, p.name, p.state, p.cmd] for p in items]
    output(items, fmt, columns=["PID", "Name", "State", "Command"], rows=rows,
           title=f"Processes: {agent_id}")


@app.command()
@error_handler
def packages(
    agent_id: Annotated[str, typer.Argument(help="Agent ID")],
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List packages installed on an agent."""
    with make_gateway(profile, url, username, password) as gw:
        items = WazuhAPI(gw).get_programs(agent_id).affected_items
    rows = [[p.name, p.version, p.vendor, p.description] for p in items]
    output(items, fmt, columns=["Name", "Version", "Vendor", "Description"], rows=rows,
           title=f"Packages: {agent_id}")


@app.command()
@error_handler
def config(
    agent_id: Annotated[str, typer.Argument(help="Agent ID")],
    component: ComponentOpt = DEFAULT_CONFIG_COMPONENT,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "json",
) -> None:
    """Show the active configuration of one agent component."""
    with make_gateway(profile, url, username, password) as gw:
        gw.authenticate()
        state = run_pipeline(gw, lambda p: p.refresh_agent_config(agent_id, component))
    if not report(state):
        raise typer.Exit(1)
    output(state.agent_config, fmt, kv=True, title=f"{component} config: {agent_id}")


@app.command("push-config")
@error_handler
def push_config(
    agent_id: Annotated[str, typer.Argument(help="Agent ID")],
    file: Annotated[Path, typer.Option("--file", help="JSON file with the new configuration")],
    component: ComponentOpt = DEFAULT_CONFIG_COMPONENT,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Push a configuration update for one agent component."""
    try:
        body = json.loads(file.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file}: {exc}") from exc
    with make_gateway(profile, url, username, password) as gw:
        state = run_pipeline(gw, lambda p: p.push_agent_config(agent_id, component, body))
    if not report(state):
        raise typer.Exit(1)


@app.command()
@error_handler
def restart(
    agent_ids: AgentIdsArg,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Send a restart signal to agents."""
    with make_gateway(profile, url, username, password) as gw:
        state = run_pipeline(gw, lambda p: p.restart_agents(agent_ids))
    if not report(state):
        raise typer.Exit(1)


@app.command()
@error_handler
def upgrade(
    agent_ids: AgentIdsArg,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Start an upgrade of agents to the manager's version."""
    with make_gateway(profile, url, username, password) as gw:
        state = run_pipeline(gw, lambda p: p.upgrade_agents(agent_ids))
    if not report(state):
        raise typer.Exit(1)
