"""Export security events to a JSON file."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from wazuh_console.client.errors import WazuhConsoleError


def default_export_path(now: datetime | None = None) -> Path:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return Path(f"wazuh_export_{stamp}.json")


def export_events(events: Sequence[Any], dest: Path | None = None) -> Path:
    """Write *events* as pretty JSON, returning the path written.

    Uses atomic write: writes a .partial temp file, then renames on success.
    """
    if not events:
        raise WazuhConsoleError("No logs available to export")
    dest = dest or default_export_path()
    temp = dest.with_suffix(dest.suffix + ".partial")
    try:
        temp.write_text(json.dumps(list(events), indent=2, default=str))
        temp.rename(dest)
    except OSError as exc:
        raise WazuhConsoleError(f"Cannot write to {dest}: {exc}") from exc
    finally:
        if temp.exists():
            temp.unlink(missing_ok=True)
    return dest
