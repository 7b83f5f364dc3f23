"""Operator filter language for agent lists.

A query is a whitespace-separated list of tokens. ``field:value`` tokens
select a field through a fixed alias table; anything else is a global
substring match against name, id and IP. All tokens must match::

    name:web st:active os:ubuntu 10.0.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from wazuh_console.models.agent import Agent


class PredicateKind(str, Enum):
    NAME = "name"
    ID = "id"
    IP = "ip"
    STATUS = "status"
    OS = "os"
    SEVERITY = "severity"
    GLOBAL = "global"


class FilterPredicate(BaseModel):
    """One parsed condition. ``value`` is an int only for severity."""

    model_config = ConfigDict(frozen=True)

    kind: PredicateKind
    value: int | str


_FIELD_ALIASES: dict[str, PredicateKind] = {
    "name": PredicateKind.NAME,
    "n": PredicateKind.NAME,
    "id": PredicateKind.ID,
    "ip": PredicateKind.IP,
    "status": PredicateKind.STATUS,
    "st": PredicateKind.STATUS,
    "os": PredicateKind.OS,
    "sev": PredicateKind.SEVERITY,
    "s": PredicateKind.SEVERITY,
}

SEVERITY_TIERS: dict[str, int] = {
    "crit": 12,
    "critical": 12,
    "high": 8,
    "med": 4,
    "medium": 4,
    "low": 0,
}


def _parse_severity(value: str) -> int | None:
    tier = SEVERITY_TIERS.get(value.lower())
    if tier is not None:
        return tier
    # Unsigned integers only; anything else is dropped
    if value.isascii() and value.isdigit():
        return int(value)
    return None


def parse_predicates(query: str) -> list[FilterPredicate]:
    predicates: list[FilterPredicate] = []
    for part in query.split():
        field, sep, value = part.partition(":")
        kind = _FIELD_ALIASES.get(field.lower()) if sep else None
        if kind is None:
            predicates.append(FilterPredicate(kind=PredicateKind.GLOBAL, value=part.lower()))
        elif kind is PredicateKind.SEVERITY:
            level = _parse_severity(value)
            if level is not None:
                predicates.append(FilterPredicate(kind=kind, value=level))
        else:
            predicates.append(FilterPredicate(kind=kind, value=value.lower()))
    return predicates


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle in haystack.lower()


def predicate_matches(predicate: FilterPredicate, agent: Agent) -> bool:
    kind = predicate.kind
    if kind is PredicateKind.SEVERITY:
        # Agents carry no severity; vacuously true until a target exists
        return True
    value = str(predicate.value)
    if kind is PredicateKind.NAME:
        return _contains(agent.name, value)
    if kind is PredicateKind.ID:
        return _contains(agent.id, value)
    if kind is PredicateKind.IP:
        return _contains(agent.ip, value)
    if kind is PredicateKind.STATUS:
        return agent.status.lower() == value
    if kind is PredicateKind.OS:
        return agent.os is not None and _contains(agent.os.name, value)
    return (
        _contains(agent.name, value)
        or _contains(agent.id, value)
        or _contains(agent.ip, value)
    )


class AgentFilter(BaseModel):
    """A parsed operator query: predicates joined with AND."""

    model_config = ConfigDict(frozen=True)

    predicates: list[FilterPredicate] = Field(default_factory=list)
    raw_query: str = ""

    @classmethod
    def parse(cls, query: str) -> AgentFilter:
        return cls(predicates=parse_predicates(query), raw_query=query)

    def matches(self, agent: Agent) -> bool:
        return all(predicate_matches(p, agent) for p in self.predicates)

    def apply(self, agents: list[Agent]) -> list[Agent]:
        return [a for a in agents if self.matches(a)]
