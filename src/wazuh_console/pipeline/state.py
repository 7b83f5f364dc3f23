"""Authoritative application state, written only by the reducer."""

from __future__ import annotations

import copy
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from wazuh_console.filters.agent_filter import AgentFilter
from wazuh_console.models.agent import Agent
from wazuh_console.models.group import Group
from wazuh_console.models.syscollector import HardwareItem, ProcessItem, ProgramItem
from wazuh_console.models.vulnerability import VulnerabilityItem, VulnerabilitySummary
from wazuh_console.pipeline.messages import NotificationLevel, ThreatStats


class SortColumn(str, Enum):
    ID = "id"
    NAME = "name"
    IP = "ip"
    STATUS = "status"
    OS = "os"
    LAST_KEEP_ALIVE = "last_keep_alive"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _sort_key(column: SortColumn, agent: Agent) -> str:
    if column is SortColumn.OS:
        return agent.os_name
    return getattr(agent, column.value) or ""


@dataclass
class Notification:
    message: str
    level: NotificationLevel
    timestamp: float = field(default_factory=time.monotonic)


@dataclass
class AppState:
    agents: list[Agent] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
    security_events: list[dict[str, Any]] = field(default_factory=list)
    security_events_total: int = 0
    vuln_summary: VulnerabilitySummary = field(default_factory=VulnerabilitySummary)
    threat_stats: ThreatStats = field(default_factory=ThreatStats)
    alert_history: list[tuple[str, int]] = field(default_factory=list)
    top_agents: list[tuple[str, int]] = field(default_factory=list)

    # Inspector
    hardware: HardwareItem | None = None
    processes: list[ProcessItem] = field(default_factory=list)
    programs: list[ProgramItem] = field(default_factory=list)
    vulnerabilities: list[VulnerabilityItem] = field(default_factory=list)
    agent_logs: list[dict[str, Any]] = field(default_factory=list)
    agent_config: Any = None
    agent_config_component: str | None = None

    notifications: list[Notification] = field(default_factory=list)
    error_message: str | None = None
    error_popup: tuple[str, str] | None = None

    sort_column: SortColumn = SortColumn.ID
    sort_order: SortOrder = SortOrder.ASC
    agent_filter: AgentFilter = field(default_factory=AgentFilter)

    def sort_agents(self) -> None:
        self.agents.sort(
            key=lambda a: _sort_key(self.sort_column, a),
            reverse=self.sort_order is SortOrder.DESC,
        )

    def visible_agents(self) -> list[Agent]:
        return self.agent_filter.apply(self.agents)

    def snapshot(self) -> AppState:
        """Deep copy for presentation; changes to it never reach the reducer."""
        return copy.deepcopy(self)
