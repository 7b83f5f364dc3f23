"""Pydantic data models for the Wazuh manager and indexer APIs."""

from wazuh_console.models.agent import Agent, AgentOS, AgentSummary
from wazuh_console.models.common import AffectedItems, ItemsResponse
from wazuh_console.models.group import Group
from wazuh_console.models.syscollector import (
    HardwareCpu,
    HardwareItem,
    HardwareRam,
    HardwareScan,
    ProcessItem,
    ProgramItem,
)
from wazuh_console.models.vulnerability import (
    FlatPackage,
    NestedPackage,
    PackageRef,
    VulnerabilityItem,
    VulnerabilitySearchResponse,
    VulnerabilitySummary,
)

__all__ = [
    "AffectedItems",
    "Agent",
    "AgentOS",
    "AgentSummary",
    "FlatPackage",
    "Group",
    "HardwareCpu",
    "HardwareItem",
    "HardwareRam",
    "HardwareScan",
    "ItemsResponse",
    "NestedPackage",
    "PackageRef",
    "ProcessItem",
    "ProgramItem",
    "VulnerabilityItem",
    "VulnerabilitySearchResponse",
    "VulnerabilitySummary",
]
