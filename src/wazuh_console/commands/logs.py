"""Security event commands — search alerts in the indexer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.text import Text

from wazuh_console.client.api import WazuhAPI, extract_hits, extract_total
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
)
from wazuh_console.config.constants import DEFAULT_LOG_LIMIT
from wazuh_console.output.formatter import output
from wazuh_console.output.tables import level_style
from wazuh_console.query.builder import LogFilter, SeverityMode
from wazuh_console.utils.export import default_export_path, export_events
from wazuh_console.utils.interval import format_interval, parse_interval

app = typer.Typer(name="logs", help="Search security events.")
console = Console()


def parse_range(text: str | None) -> tuple[int, int] | None:
    """``"5-12"`` -> ``(5, 12)``."""
    if text is None:
        return None
    low, sep, high = text.partition("-")
    if not sep or not low.strip().isdigit() or not high.strip().isdigit():
        raise ValueError(f"Invalid level range '{text}': expected LOW-HIGH, e.g. 5-12")
    return int(low), int(high)


def build_filter(
    min_level: int | None,
    max_level: int | None,
    exact_level: int | None,
    level_range: tuple[int, int] | None,
    agent: str,
    rule: str,
    text: str,
    mitre: str,
) -> LogFilter | None:
    """Translate CLI options into a LogFilter; None when nothing was given."""
    modes = [
        (SeverityMode.MIN, min_level),
        (SeverityMode.MAX, max_level),
        (SeverityMode.EXACT, exact_level),
    ]
    chosen = [(m, v) for m, v in modes if v is not None]
    if level_range is not None:
        chosen.append((SeverityMode.RANGE, level_range[0]))
    if len(chosen) > 1:
        raise ValueError("Use only one of --min, --max, --exact, --range")
    if not chosen and not any((agent, rule, text, mitre)):
        return None
    mode, val1 = chosen[0] if chosen else (SeverityMode.MIN, 0)
    val2 = level_range[1] if level_range is not None else 15
    return LogFilter(
        mode=mode,
        val1=val1,
        val2=val2,
        agent_filter=agent,
        rule_id_filter=rule,
        description_filter=text,
        mitre_filter=mitre,
    )


def _event_row(hit: dict[str, Any]) -> list[Any]:
    src = hit.get("_source") or {}
    rule = src.get("rule") or {}
    level = rule.get("level")
    mitre = rule.get("mitre") or {}
    return [
        src.get("@timestamp", src.get("timestamp", "")),
        Text(str(level), style=level_style(level)) if isinstance(level, int) else "",
        (src.get("agent") or {}).get("name", ""),
        rule.get("id", ""),
        rule.get("description", ""),
        ",".join(mitre.get("id", [])) if isinstance(mitre.get("id"), list) else mitre.get("id", ""),
    ]


@app.command()
@error_handler
def search(
    interval: IntervalOpt = DEFAULT_INTERVAL,
    min_level: Annotated[int | None, typer.Option("--min", help="Rule level >= N")] = None,
    max_level: Annotated[int | None, typer.Option("--max", help="Rule level <= N")] = None,
    exact_level: Annotated[int | None, typer.Option("--exact", help="Rule level == N")] = None,
    level_range: Annotated[
        str | None, typer.Option("--range", help="Rule level between LOW-HIGH, e.g. 5-12"),
    ] = None,
    agent: Annotated[str, typer.Option("--agent", help="Agent name contains")] = "",
    rule: Annotated[str, typer.Option("--rule", help="Rule ID: exact, comma list, or wildcard")] = "",
    text: Annotated[str, typer.Option("--text", help="Words in the rule description")] = "",
    mitre: Annotated[str, typer.Option("--mitre", help="MITRE id, tactic or technique contains")] = "",
    agent_id: Annotated[str | None, typer.Option("--agent-id", help="Only events from this agent")] = None,
    offset: Annotated[int, typer.Option("--offset", help="Offset for pagination")] = 0,
    limit: Annotated[int, typer.Option("--limit", help="Max events to return")] = DEFAULT_LOG_LIMIT,
    export: Annotated[bool, typer.Option("--export", help="Also write events to a JSON file")] = False,
    export_path: Annotated[Path | None, typer.Option("--export-path", help="Export file path")] = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    search_url: SearchUrlOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Search alerts from the last INTERVAL, newest first."""
    minutes = parse_interval(interval)
    if minutes is None:
        raise ValueError("--interval must not be empty")
    log_filter = build_filter(
        min_level, max_level, exact_level, parse_range(level_range), agent, rule, text, mitre,
    )
    with make_gateway(profile, url, username, password, search_url) as gw:
        response = WazuhAPI(gw).get_logs(agent_id, minutes, offset, limit, log_filter)
    hits = extract_hits(response)
    total = extract_total(response)
    rows = [_event_row(h) for h in hits]
    output(
        hits, fmt,
        columns=["Timestamp", "Level", "Agent", "Rule", "Description", "MITRE"],
        rows=rows,
        title=f"Security events, last {format_interval(minutes)} ({len(hits)} of {total})",
    )
    if export:
        path = export_events(hits, export_path or default_export_path())
        console.print(f"[green]Logs exported to {path}[/]")
