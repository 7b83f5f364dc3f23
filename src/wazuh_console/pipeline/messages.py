"""Messages posted by background operations.

Each variant replaces exactly one slice of :class:`~wazuh_console.pipeline.state.AppState`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from wazuh_console.models.agent import Agent
from wazuh_console.models.group import Group
from wazuh_console.models.syscollector import HardwareItem, ProcessItem, ProgramItem
from wazuh_console.models.vulnerability import VulnerabilityItem, VulnerabilitySummary


class NotificationLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ThreatStats:
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


@dataclass(frozen=True)
class AgentsUpdated:
    agents: list[Agent]


@dataclass(frozen=True)
class GroupsUpdated:
    groups: list[Group]


@dataclass(frozen=True)
class GroupAgentsUpdated:
    agents: list[Agent]


@dataclass(frozen=True)
class SecurityEventsUpdated:
    events: list[dict[str, Any]]
    total: int = 0


@dataclass(frozen=True)
class VulnSummaryUpdated:
    summary: VulnerabilitySummary


@dataclass(frozen=True)
class ThreatStatsUpdated:
    stats: ThreatStats


@dataclass(frozen=True)
class AlertHistoryUpdated:
    buckets: list[tuple[str, int]]


@dataclass(frozen=True)
class TopAgentsUpdated:
    agents: list[tuple[str, int]]


@dataclass(frozen=True)
class AgentHardwareUpdated:
    hardware: HardwareItem


@dataclass(frozen=True)
class AgentProcessesUpdated:
    processes: list[ProcessItem]


@dataclass(frozen=True)
class AgentProgramsUpdated:
    programs: list[ProgramItem]


@dataclass(frozen=True)
class AgentVulnerabilitiesUpdated:
    vulnerabilities: list[VulnerabilityItem]


@dataclass(frozen=True)
class AgentLogsUpdated:
    events: list[dict[str, Any]]


@dataclass(frozen=True)
class AgentConfigUpdated:
    component: str
    config: Any


@dataclass(frozen=True)
class NotificationPosted:
    message: str
    level: NotificationLevel = NotificationLevel.INFO


@dataclass(frozen=True)
class ErrorRaised:
    message: str


@dataclass(frozen=True)
class ErrorPopupRaised:
    title: str
    message: str


DataUpdate = Union[
    AgentsUpdated,
    GroupsUpdated,
    GroupAgentsUpdated,
    SecurityEventsUpdated,
    VulnSummaryUpdated,
    ThreatStatsUpdated,
    AlertHistoryUpdated,
    TopAgentsUpdated,
    AgentHardwareUpdated,
    AgentProcessesUpdated,
    AgentProgramsUpdated,
    AgentVulnerabilitiesUpdated,
    AgentLogsUpdated,
    AgentConfigUpdated,
    NotificationPosted,
    ErrorRaised,
    ErrorPopupRaised,
]
