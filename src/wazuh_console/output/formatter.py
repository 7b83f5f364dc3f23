"""Output dispatcher — renders data in table, JSON, YAML, or CSV format."""

from __future__ import annotations

import csv
import dataclasses
import io
import json
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.text import Text

from wazuh_console.output.tables import kv_table, make_table

console = Console()

FORMATS = ("table", "json", "yaml", "csv")


def to_plain(data: Any) -> Any:
    """Convert pydantic models and dataclasses (nested in lists/dicts) to JSON types."""
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json", by_alias=False)
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return {f.name: to_plain(getattr(data, f.name)) for f in dataclasses.fields(data)}
    if isinstance(data, dict):
        return {str(k): to_plain(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_plain(v) for v in data]
    return data


def output_json(data: Any) -> None:
    """Print data as formatted JSON."""
    console.print_json(json.dumps(to_plain(data), indent=2, default=str))


def output_yaml(data: Any) -> None:
    """Print data as YAML."""
    import yaml

    console.print(
        yaml.safe_dump(to_plain(data), default_flow_style=False, sort_keys=False), end="",
    )


def output_csv(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    """Print data as CSV."""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(columns)
    writer.writerows(
        [[v.plain if isinstance(v, Text) else str(v) if v is not None else "" for v in row]
         for row in rows]
    )
    console.print(buf.getvalue(), end="", markup=False)


def output_table(
    data: Any,
    *,
    columns: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
    title: str | None = None,
) -> None:
    """Print data as a Rich table."""
    if columns and rows is not None:
        console.print(make_table(title, columns, rows))
        return
    plain = to_plain(data)
    if isinstance(plain, dict):
        console.print(kv_table(plain, title=title))
    else:
        console.print(plain)


def output(
    data: Any,
    fmt: str = "table",
    *,
    columns: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
    title: str | None = None,
    kv: bool = False,
) -> None:
    """Dispatch output to the appropriate formatter."""
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format '{fmt}'. Choose from: {', '.join(FORMATS)}")
    if fmt == "json":
        output_json(data)
    elif fmt == "yaml":
        output_yaml(data)
    elif fmt == "csv":
        if columns and rows is not None:
            output_csv(columns, rows)
        else:
            output_json(data)
    elif kv and isinstance(to_plain(data), dict):
        console.print(kv_table(to_plain(data), title=title))
    else:
        output_table(data, columns=columns, rows=rows, title=title)
