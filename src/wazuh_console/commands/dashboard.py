"""Dashboard commands — one refresh cycle through the update pipeline."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from wazuh_console.client.errors import error_handler
from wazuh_console.commands._common import (
    DEFAULT_INTERVAL,
    FormatOpt,
    IntervalOpt,
    PasswordOpt,
    ProfileOpt,
    SearchUrlOpt,
    UrlOpt,
    UsernameOpt,
    make_gateway,
    report,
    run_pipeline,
)
from wazuh_console.config.constants import DEFAULT_CONFIG_COMPONENT
from wazuh_console.output.formatter import output
from wazuh_console.output.tables import make_table, styled_status
from wazuh_console.pipeline.state import AppState
from wazuh_console.utils.interval import format_interval, parse_interval

app = typer.Typer(name="dashboard", help="Overview of agents, alerts and vulnerabilities.")
console = Console()


def _minutes(interval: str) -> int:
    minutes = parse_interval(interval)
    if minutes is None:
        raise ValueError("--interval must not be empty")
    return minutes


def _print_overview(state: AppState, minutes: int) -> None:
    counts: dict[str, int] = {}
    for agent in state.agents:
        counts[agent.status] = counts.get(agent.status, 0) + 1
    console.print(make_table(
        f"Agents ({len(state.agents)})",
        ["Status", "Count"],
        [[styled_status(status), n] for status, n in sorted(counts.items())],
    ))
    console.print(make_table(
        f"Groups ({len(state.groups)})",
        ["Name", "Agents"],
        [[g.name, g.count] for g in state.groups],
    ))
    threats = state.threat_stats
    console.print(make_table(
        f"Alerts, last {format_interval(minutes)}",
        ["Critical", "High", "Medium", "Low"],
        [[threats.critical, threats.high, threats.medium, threats.low]],
    ))
    if state.alert_history:
        console.print(make_table("Alert history", ["Minute", "Alerts"], state.alert_history))
    if state.top_agents:
        console.print(make_table("Top agents", ["Agent", "Alerts"], state.top_agents))
    vs = state.vuln_summary
    console.print(make_table(
        "Vulnerabilities",
        ["Critical", "High", "Medium", "Low", "Untriaged"],
        [[vs.critical, vs.high, vs.medium, vs.low, vs.untriaged]],
    ))


@app.command()
@error_handler
def show(
    interval: IntervalOpt = DEFAULT_INTERVAL,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    search_url: SearchUrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Refresh every dashboard slice once and print the result."""
    minutes = _minutes(interval)
    with make_gateway(profile, url, username, password, search_url) as gw:
        # Bad credentials end here with a setup hint instead of a failed refresh
        gw.authenticate()
        state = run_pipeline(gw, lambda p: p.refresh_dashboard(minutes))
    snapshot = state.snapshot()
    if fmt == "table":
        _print_overview(snapshot, minutes)
    else:
        output(
            {
                "agents": snapshot.agents,
                "groups": snapshot.groups,
                "threat_stats": snapshot.threat_stats,
                "alert_history": snapshot.alert_history,
                "top_agents": snapshot.top_agents,
                "vulnerability_summary": snapshot.vuln_summary,
            },
            fmt,
        )
    if not report(snapshot):
        raise typer.Exit(1)


@app.command()
@error_handler
def inspect(
    agent_id: Annotated[str, typer.Argument(help="Agent ID")],
    interval: IntervalOpt = DEFAULT_INTERVAL,
    component: Annotated[
        str, typer.Option("--component", "-c", help="Config component to load"),
    ] = DEFAULT_CONFIG_COMPONENT,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    search_url: SearchUrlOpt = None,
    fmt: FormatOpt = "json",
) -> None:
    """Load the full inspector view of one agent."""
    minutes = _minutes(interval)
    with make_gateway(profile, url, username, password, search_url) as gw:
        gw.authenticate()
        state = run_pipeline(gw, lambda p: p.inspect_agent(agent_id, minutes, component))
    snapshot = state.snapshot()
    output(
        {
            "hardware": snapshot.hardware,
            "processes": snapshot.processes,
            "packages": snapshot.programs,
            "vulnerabilities": snapshot.vulnerabilities,
            "logs": snapshot.agent_logs,
            "config": {snapshot.agent_config_component or component: snapshot.agent_config},
        },
        fmt,
        kv=True,
        title=f"Agent {agent_id}",
    )
    if not report(snapshot):
        raise typer.Exit(1)
