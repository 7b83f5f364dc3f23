"""Build indexer query documents for alerts and vulnerability state."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from wazuh_console.config.constants import VULNERABILITY_PAGE_LIMIT


class SeverityMode(str, Enum):
    MIN = "min"
    MAX = "max"
    EXACT = "exact"
    RANGE = "range"


class LogFilter(BaseModel):
    """Alert filter edited by the operator.

    ``val2`` is only used by :attr:`SeverityMode.RANGE`. Empty text fields
    add no clause.
    """

    mode: SeverityMode = SeverityMode.MIN
    val1: int = Field(default=0, ge=0)
    val2: int = Field(default=15, ge=0)
    agent_filter: str = ""
    rule_id_filter: str = ""
    description_filter: str = ""
    mitre_filter: str = ""


def time_range_clause(minutes: int) -> dict[str, Any]:
    return {"range": {"@timestamp": {"gte": f"now-{minutes}m", "lte": "now"}}}


def severity_clause(log_filter: LogFilter) -> dict[str, Any]:
    mode = log_filter.mode
    if mode is SeverityMode.MAX:
        return {"range": {"rule.level": {"lte": log_filter.val1}}}
    if mode is SeverityMode.EXACT:
        return {"term": {"rule.level": log_filter.val1}}
    if mode is SeverityMode.RANGE:
        return {"range": {"rule.level": {"gte": log_filter.val1, "lte": log_filter.val2}}}
    return {"range": {"rule.level": {"gte": log_filter.val1}}}


def _contains_wildcard(field: str, needle: str) -> dict[str, Any]:
    return {
        "wildcard": {
            field: {"value": f"*{needle.lower()}*", "case_insensitive": True}
        }
    }


def rule_id_clause(rule_ids: str) -> dict[str, Any]:
    """Comma list -> terms, ``*`` -> wildcard, otherwise an exact term."""
    if "," in rule_ids:
        return {"terms": {"rule.id": [r.strip() for r in rule_ids.split(",")]}}
    if "*" in rule_ids:
        return {"wildcard": {"rule.id": {"value": rule_ids}}}
    return {"term": {"rule.id": rule_ids}}


def mitre_clause(needle: str) -> dict[str, Any]:
    return {
        "bool": {
            "should": [
                _contains_wildcard("rule.mitre.id", needle),
                _contains_wildcard("rule.mitre.tactic", needle),
                _contains_wildcard("rule.mitre.technique", needle),
            ],
            "minimum_should_match": 1,
        }
    }


def filter_clauses(log_filter: LogFilter) -> list[dict[str, Any]]:
    clauses = [severity_clause(log_filter)]
    if log_filter.agent_filter:
        clauses.append(_contains_wildcard("agent.name", log_filter.agent_filter))
    if log_filter.rule_id_filter:
        clauses.append(rule_id_clause(log_filter.rule_id_filter))
    if log_filter.description_filter:
        clauses.append({
            "match": {
                "rule.description": {
                    "query": log_filter.description_filter,
                    "operator": "and",
                }
            }
        })
    if log_filter.mitre_filter:
        clauses.append(mitre_clause(log_filter.mitre_filter))
    return clauses


def build_log_query(
    minutes: int,
    offset: int,
    limit: int,
    log_filter: LogFilter | None = None,
    agent_id: str | None = None,
) -> dict[str, Any]:
    """Alerts from the last *minutes*, newest first, one page."""
    must = [time_range_clause(minutes)]
    if log_filter is not None:
        must.extend(filter_clauses(log_filter))
    if agent_id is not None:
        must.append({"term": {"agent.id": agent_id}})
    return {
        "from": offset,
        "size": limit,
        "sort": [{"@timestamp": {"order": "desc"}}],
        "query": {"bool": {"must": must}},
    }


def build_vulnerability_query(
    agent_id: str, size: int = VULNERABILITY_PAGE_LIMIT,
) -> dict[str, Any]:
    return {
        "size": size,
        "query": {"bool": {"must": [{"term": {"agent.id": agent_id}}]}},
        "sort": [{"vulnerability.severity": {"order": "asc"}}],
    }


def build_vulnerability_summary_query() -> dict[str, Any]:
    """Counts of vulnerability documents per severity, no hits."""
    return {
        "size": 0,
        "aggs": {
            "severity": {"terms": {"field": "vulnerability.severity", "size": 10}}
        },
    }
