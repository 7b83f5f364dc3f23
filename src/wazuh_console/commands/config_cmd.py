"""Config commands — manage connection profiles."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt

from wazuh_console.client.errors import error_handler
from wazuh_console.config.manager import ConfigManager
from wazuh_console.config.models import ConsoleProfile
from wazuh_console.output.formatter import output

app = typer.Typer(name="config", help="Manage connection profiles and CLI configuration.")
console = Console()

_SECRET_FIELDS = ("password", "search_password")


def _get_manager() -> ConfigManager:
    return ConfigManager()


@app.command()
@error_handler
def init() -> None:
    """Interactive setup wizard — create your first connection profile."""
    mgr = _get_manager()
    console.print("[bold]Wazuh Console Setup[/]\n")

    name = Prompt.ask("Profile name", default="default")
    url = Prompt.ask("Manager API URL", default="https://localhost:55000")
    username = Prompt.ask("Username", default="wazuh")
    password = Prompt.ask("Password", password=True)
    search_url = Prompt.ask("Indexer URL (leave empty to skip)", default="")
    search_username = search_password = None
    if search_url:
        search_username = Prompt.ask("Indexer username", default="admin")
        search_password = Prompt.ask("Indexer password", password=True)
    verify_ssl = Confirm.ask("Verify SSL certificates?", default=False)

    profile = ConsoleProfile(
        name=name,
        url=url,
        username=username,
        password=password,
        search_url=search_url or None,
        search_username=search_username,
        search_password=search_password,
        verify_ssl=verify_ssl,
    )
    mgr.add_profile(profile)
    console.print(f"\n[green]Profile '{name}' saved.[/]")
    console.print(f"Config file: {mgr.config_path}")


@app.command()
@error_handler
def add(
    name: Annotated[str, typer.Argument(help="Profile name")],
    url: Annotated[str, typer.Option("--url", "-u", help="Manager API URL")],
    username: Annotated[str, typer.Option("--username", help="Manager API username")],
    password: Annotated[str, typer.Option("--password", help="Manager API password")],
    search_url: Annotated[Optional[str], typer.Option("--search-url", help="Indexer URL")] = None,
    search_username: Annotated[
        Optional[str], typer.Option("--search-username", help="Indexer username"),
    ] = None,
    search_password: Annotated[
        Optional[str], typer.Option("--search-password", help="Indexer password"),
    ] = None,
    verify_ssl: Annotated[bool, typer.Option("--verify-ssl", help="Verify SSL certificates")] = False,
    set_default: Annotated[bool, typer.Option("--default", help="Set as default profile")] = False,
) -> None:
    """Add a connection profile."""
    mgr = _get_manager()
    profile = ConsoleProfile(
        name=name,
        url=url,
        username=username,
        password=password,
        search_url=search_url,
        search_username=search_username,
        search_password=search_password,
        verify_ssl=verify_ssl,
    )
    mgr.add_profile(profile)
    if set_default:
        mgr.set_default(name)
    console.print(f"[green]Profile '{name}' added.[/]")


@app.command("list")
@error_handler
def list_profiles(
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """List all configured profiles."""
    mgr = _get_manager()
    profiles = mgr.config.profiles
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'wazuh-console config init' to get started.[/]")
        return

    default = mgr.config.default_profile
    columns = ["Name", "URL", "Indexer", "User", "Default"]
    rows = [
        [name, p.url, p.search_url or "", p.username, "*" if name == default else ""]
        for name, p in profiles.items()
    ]
    output(
        {"profiles": [p.model_dump(exclude=set(_SECRET_FIELDS), exclude_none=True)
                      for p in profiles.values()]},
        fmt,
        columns=columns,
        rows=rows,
        title="Connection Profiles",
    )


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Profile name")],
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """Show profile details."""
    mgr = _get_manager()
    profile = mgr.get_profile(name)
    if not profile:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    data = profile.model_dump(exclude_none=True)
    for key in _SECRET_FIELDS:
        if key in data:
            data[key] = "***"

    output(data, fmt, kv=True, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(
    name: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default connection profile."""
    mgr = _get_manager()
    if mgr.set_default(name):
        console.print(f"[green]Default profile set to '{name}'.[/]")
    else:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)


@app.command()
@error_handler
def test(
    name: Annotated[Optional[str], typer.Argument(help="Profile name (uses default if omitted)")] = None,
) -> None:
    """Test authentication against the manager API."""
    from wazuh_console.client.gateway import WazuhGateway

    mgr = _get_manager()
    profile = mgr.resolve_profile(profile_name=name)
    console.print(f"Testing connection to [bold]{profile.url}[/]...")

    with WazuhGateway(profile) as gw:
        gw.authenticate()
    console.print(f"[green]Connected![/] Authenticated as {profile.username}.")


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Remove a connection profile."""
    mgr = _get_manager()
    if not mgr.get_profile(name):
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    if not force:
        if not Confirm.ask(f"Remove profile '{name}'?"):
            console.print("Cancelled.")
            return

    mgr.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
