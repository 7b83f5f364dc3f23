"""Rich table rendering helpers."""

from __future__ import annotations

from typing import Any, Sequence

from rich.table import Table
from rich.text import Text

_STATUS_STYLES = {
    "active": "green",
    "disconnected": "red",
    "never_connected": "yellow",
    "pending": "yellow",
}

_SEVERITY_STYLES = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "green",
}


def styled_status(status: str) -> Text:
    return Text(status, style=_STATUS_STYLES.get(status.lower(), ""))


def styled_severity(severity: str) -> Text:
    return Text(severity, style=_SEVERITY_STYLES.get(severity.lower(), ""))


def level_style(level: int) -> str:
    """Style for an alert rule level, matching the dashboard buckets."""
    if level >= 15:
        return "bold red"
    if level >= 12:
        return "red"
    if level >= 7:
        return "yellow"
    return ""


def _cell(value: Any) -> Text | str:
    if isinstance(value, Text):
        return value
    return str(value) if value is not None else ""


def make_table(
    title: str | None,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    *,
    show_lines: bool = False,
) -> Table:
    """Build a Rich Table from column headers and row data."""
    table = Table(title=title, show_lines=show_lines)
    for col in columns:
        table.add_column(col, no_wrap=False)
    for row in rows:
        table.add_row(*(_cell(cell) for cell in row))
    return table


def kv_table(data: dict[str, Any], *, title: str | None = None) -> Table:
    """Render a key-value dict as a two-column table."""
    table = Table(title=title, show_header=False, show_lines=False)
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")
    for key, value in data.items():
        table.add_row(key, _cell(value))
    return table
