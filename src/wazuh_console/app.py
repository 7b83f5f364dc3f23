"""Root Typer app — global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer

from wazuh_console import __version__
from wazuh_console.commands import agents, config_cmd, dashboard, groups, logs, vulns
from wazuh_console.log import configure_logging

app = typer.Typer(
    name="wazuh-console",
    help="Operator console for the Wazuh manager API and indexer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"wazuh-console {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and background tasks."),
) -> None:
    """Wazuh console — agents, groups, security events and vulnerabilities."""
    configure_logging(verbose)


# Register command groups
app.add_typer(config_cmd.app, name="config")
app.add_typer(agents.app, name="agents")
app.add_typer(groups.app, name="groups")
app.add_typer(logs.app, name="logs")
app.add_typer(vulns.app, name="vulns")
app.add_typer(dashboard.app, name="dashboard")


def main() -> None:
    app()
