"""Vulnerability commands — per-agent findings and fleet-wide severity counts."""

from __future__ import annotations

from typing import Annotated

import typer

from wazuh_console.client.errors import error_handler
from wazuh_console.commands._common import (
    FormatOpt,
    PasswordOpt,
    ProfileOpt,
    SearchUrlOpt,
    UrlOpt,
    UsernameOpt,
    make_gateway,
    report,
    run_pipeline,
)
from wazuh_console.output.formatter import output
from wazuh_console.output.tables import styled_severity

app = typer.Typer(name="vulns", help="Vulnerability state from the indexer.")


@app.command("list")
@error_handler
def list_vulns(
    agent_id: Annotated[str, typer.Argument(help="Agent ID")],
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    search_url: SearchUrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List vulnerabilities detected on an agent."""
    with make_gateway(profile, url, username, password, search_url) as gw:
        gw.require_search()
        state = run_pipeline(gw, lambda p: p.refresh_agent_vulnerabilities(agent_id))
    if not report(state):
        raise typer.Exit(1)
    found = state.vulnerabilities
    rows = [
        [v.cve, styled_severity(v.severity), v.package_name, v.package_version, v.title]
        for v in found
    ]
    output(
        found, fmt,
        columns=["CVE", "Severity", "Package", "Version", "Title"],
        rows=rows,
        title=f"Vulnerabilities: {agent_id} ({len(found)})",
    )


@app.command()
@error_handler
def summary(
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    search_url: SearchUrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Count vulnerabilities across all agents by severity."""
    with make_gateway(profile, url, username, password, search_url) as gw:
        gw.require_search()
        state = run_pipeline(gw, lambda p: p.refresh_vulnerability_summary())
    if not report(state):
        raise typer.Exit(1)
    output(state.vuln_summary, fmt, kv=True, title="Vulnerability Summary")
