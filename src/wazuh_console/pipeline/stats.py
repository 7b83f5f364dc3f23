"""Dashboard statistics derived from a page of alert hits."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Any

from wazuh_console.pipeline.messages import ThreatStats

TOP_AGENTS = 5


def _sources(hits: Iterable[dict[str, Any]]) -> Iterable[dict[str, Any]]:
    for hit in hits:
        source = hit.get("_source")
        if isinstance(source, dict):
            yield source


def threat_stats(hits: Iterable[dict[str, Any]]) -> ThreatStats:
    """Bucket alerts by rule level: 15+ critical, 12-14 high, 7-11 medium."""
    counts = Counter[str]()
    for source in _sources(hits):
        level = (source.get("rule") or {}).get("level")
        if not isinstance(level, int) or isinstance(level, bool):
            continue
        if level >= 15:
            counts["critical"] += 1
        elif level >= 12:
            counts["high"] += 1
        elif level >= 7:
            counts["medium"] += 1
        else:
            counts["low"] += 1
    return ThreatStats(**counts)


def alert_history(hits: Iterable[dict[str, Any]]) -> list[tuple[str, int]]:
    """Alert counts per ``HH:MM`` minute, in key order."""
    buckets = Counter[str]()
    for source in _sources(hits):
        ts = source.get("@timestamp")
        if isinstance(ts, str) and len(ts) >= 16:
            buckets[ts[11:16]] += 1
    return sorted(buckets.items())


def top_agents(hits: Iterable[dict[str, Any]], n: int = TOP_AGENTS) -> list[tuple[str, int]]:
    counts = Counter[str]()
    for source in _sources(hits):
        name = (source.get("agent") or {}).get("name")
        if isinstance(name, str):
            counts[name] += 1
    return counts.most_common(n)
