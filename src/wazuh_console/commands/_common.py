"""Shared helpers for CLI commands — gateway factory, options, pipeline runner."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from wazuh_console.client.gateway import WazuhGateway
from wazuh_console.config.constants import DEFAULT_LOG_INTERVAL_MINUTES, TICK_SECONDS
from wazuh_console.config.manager import ConfigManager
from wazuh_console.pipeline.dispatcher import UpdatePipeline
from wazuh_console.pipeline.messages import NotificationLevel
from wazuh_console.pipeline.reducer import StateReducer
from wazuh_console.pipeline.state import AppState

_console = Console()

# Shared Typer option type aliases
ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-p", help="Connection profile"),
]
UrlOpt = Annotated[
    str | None,
    typer.Option("--url", help="Manager API URL override"),
]
UsernameOpt = Annotated[
    str | None,
    typer.Option("--username", help="Manager API username override"),
]
PasswordOpt = Annotated[
    str | None,
    typer.Option("--password", help="Manager API password override"),
]
SearchUrlOpt = Annotated[
    str | None,
    typer.Option("--search-url", help="Indexer URL override"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (table, json, yaml, csv)"),
]
IntervalOpt = Annotated[
    str,
    typer.Option("--interval", "-i", help="Time window, e.g. 15m, 2h, 1d"),
]
DEFAULT_INTERVAL = f"{DEFAULT_LOG_INTERVAL_MINUTES}m"

_LEVEL_STYLES = {
    NotificationLevel.INFO: "dim",
    NotificationLevel.SUCCESS: "green",
    NotificationLevel.WARNING: "yellow",
    NotificationLevel.ERROR: "red",
}


def make_gateway(
    profile: str | None,
    url: str | None,
    username: str | None,
    password: str | None,
    search_url: str | None = None,
) -> WazuhGateway:
    """Create a WazuhGateway from CLI options, env vars, or config profile."""
    mgr = ConfigManager()
    resolved = mgr.resolve_profile(
        profile_name=profile,
        url=url,
        username=username,
        password=password,
        search_url=search_url,
    )
    return WazuhGateway(resolved)


def run_pipeline(
    gateway: WazuhGateway,
    issue: Callable[[UpdatePipeline], Any],
    *,
    tick: float = TICK_SECONDS,
) -> AppState:
    """Issue commands on a fresh pipeline and reduce until every task is done."""
    state = AppState()
    with UpdatePipeline(gateway) as pipeline:
        # Keep every notification for printing once the run ends
        reducer = StateReducer(state, pipeline.updates, notification_ttl=float("inf"))
        issue(pipeline)
        while pipeline.pending:
            reducer.tick()
            time.sleep(tick)
    reducer.tick()
    return state


def report(state: AppState) -> bool:
    """Print notifications and errors from a run; return True if none failed."""
    ok = True
    for note in state.notifications:
        _console.print(f"[{_LEVEL_STYLES[note.level]}]{escape(note.message)}[/]")
        if note.level is NotificationLevel.ERROR:
            ok = False
    if state.error_popup:
        title, message = state.error_popup
        _console.print(f"[bold red]{escape(title)}:[/] {escape(message)}")
        ok = False
    if state.error_message:
        _console.print(f"[red]{escape(state.error_message)}[/]")
        ok = False
    return ok
