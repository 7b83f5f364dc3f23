"""Typed operations on the Wazuh manager and indexer.

Every method wraps one backend capability and returns a pydantic model or
decoded JSON. Errors propagate unchanged; the only retry is the gateway's
single reauthentication on 401.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from wazuh_console.client.errors import DeserializationError
from wazuh_console.client.gateway import WazuhGateway
from wazuh_console.config.constants import (
    AGENT_PAGE_LIMIT,
    ALERTS_INDEX,
    VULNERABILITIES_INDEX,
)
from wazuh_console.models.agent import Agent, AgentSummary
from wazuh_console.models.common import AffectedItems, ItemsResponse
from wazuh_console.models.group import Group
from wazuh_console.models.syscollector import HardwareItem, ProcessItem, ProgramItem
from wazuh_console.models.vulnerability import (
    VulnerabilityItem,
    VulnerabilitySearchResponse,
    VulnerabilitySummary,
)
from wazuh_console.query.builder import (
    LogFilter,
    build_log_query,
    build_vulnerability_query,
    build_vulnerability_summary_query,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# Config component -> section, where they differ
_CONFIG_SECTIONS = {
    "logcollector": "localfile",
    "agent": "client",
    "analysis": "global",
}

_SUMMARY_STATUSES = ("active", "disconnected", "never_connected")


def config_section(component: str) -> str:
    return _CONFIG_SECTIONS.get(component, component)


def _validate(model: type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise DeserializationError(str(exc)) from exc


def _agents_list(agent_ids: Sequence[str]) -> str:
    return ",".join(agent_ids)


def extract_hits(response: Any) -> list[dict[str, Any]]:
    """The ``hits.hits`` array of a search response, or an empty list."""
    if isinstance(response, dict):
        hits = response.get("hits")
        if isinstance(hits, dict) and isinstance(hits.get("hits"), list):
            return list(hits["hits"])
    return []


def extract_total(response: Any) -> int:
    if isinstance(response, dict):
        total = (response.get("hits") or {}).get("total")
        if isinstance(total, dict):
            return int(total.get("value", 0))
        if isinstance(total, int):
            return total
    return 0


class WazuhAPI:
    """Domain operations bound to one gateway."""

    def __init__(self, gateway: WazuhGateway) -> None:
        self.gateway = gateway

    # Agents

    def list_agents(
        self,
        group: str | None = None,
        offset: int = 0,
        limit: int = AGENT_PAGE_LIMIT,
    ) -> AffectedItems[Agent]:
        params: dict[str, Any] = {"offset": offset, "limit": limit}
        if group and group != "all":
            params["group"] = group
        data = self.gateway.get_json("/agents", params=params)
        return _validate(ItemsResponse[Agent], data).data

    def get_summary(self) -> AgentSummary:
        """Agent counts by status from the first page of agents.

        Statuses other than active, disconnected and never_connected are
        counted in ``total`` only.
        """
        page = self.list_agents(None, 0, AGENT_PAGE_LIMIT)
        counts = dict.fromkeys(_SUMMARY_STATUSES, 0)
        for agent in page.affected_items:
            if agent.status in counts:
                counts[agent.status] += 1
        return AgentSummary(total=page.total_affected_items, **counts)

    def restart_agents(self, agent_ids: Sequence[str]) -> Any:
        return self.gateway.execute_json(
            "PUT", f"/agents/restart?agents_list={_agents_list(agent_ids)}",
        )

    def upgrade_agents(self, agent_ids: Sequence[str]) -> Any:
        return self.gateway.execute_json(
            "PUT", f"/agents/upgrade?agents_list={_agents_list(agent_ids)}",
        )

    # Groups

    def get_groups(self) -> AffectedItems[Group]:
        data = self.gateway.get_json("/groups")
        return _validate(ItemsResponse[Group], data).data

    def create_group(self, group_id: str) -> Any:
        return self.gateway.execute_json("POST", "/groups", json={"group_id": group_id})

    def delete_group(self, group_id: str) -> Any:
        return self.gateway.execute_json(
            "DELETE", f"/groups?groups_list={group_id}",
        )

    def assign_agents_to_group(self, group_id: str, agent_ids: Sequence[str]) -> Any:
        return self.gateway.execute_json(
            "PUT", f"/groups/{group_id}/agents?agents_list={_agents_list(agent_ids)}",
        )

    def remove_agents_from_group(self, group_id: str, agent_ids: Sequence[str]) -> Any:
        return self.gateway.execute_json(
            "DELETE", f"/groups/{group_id}/agents?agents_list={_agents_list(agent_ids)}",
        )

    # Syscollector inventory

    def get_hardware_info(self, agent_id: str) -> AffectedItems[HardwareItem]:
        data = self.gateway.get_json(f"/syscollector/{agent_id}/hardware")
        return _validate(ItemsResponse[HardwareItem], data).data

    def get_processes(self, agent_id: str) -> AffectedItems[ProcessItem]:
        data = self.gateway.get_json(f"/syscollector/{agent_id}/processes")
        return _validate(ItemsResponse[ProcessItem], data).data

    def get_programs(self, agent_id: str) -> AffectedItems[ProgramItem]:
        data = self.gateway.get_json(f"/syscollector/{agent_id}/packages")
        return _validate(ItemsResponse[ProgramItem], data).data

    # Agent configuration

    def get_agent_config(self, agent_id: str, component: str) -> Any:
        """Active configuration of one component.

        The manager nests it under ``data.<section>``; fall back to ``data``
        and then to the whole body when that key is missing.
        """
        section = config_section(component)
        body = self.gateway.get_json(f"/agents/{agent_id}/config/{component}/{section}")
        if isinstance(body, dict) and "data" in body:
            data = body["data"]
            if isinstance(data, dict) and section in data:
                return data[section]
            return data
        return body

    def update_agent_config(self, agent_id: str, component: str, config: Any) -> Any:
        section = config_section(component)
        return self.gateway.execute_json(
            "PUT", f"/agents/{agent_id}/config/{component}/{section}", json=config,
        )

    # Indexer

    def get_vulnerabilities(self, agent_id: str) -> AffectedItems[VulnerabilityItem]:
        # The manager's own vulnerability endpoint does not reflect 4.x data
        raw = self.gateway.search(VULNERABILITIES_INDEX, build_vulnerability_query(agent_id))
        response = _validate(VulnerabilitySearchResponse, raw)
        items = [hit.source.to_item() for hit in response.hits.hits]
        return AffectedItems[VulnerabilityItem](
            affected_items=items, total_affected_items=response.hits.total.value,
        )

    def get_vulnerability_summary(self) -> VulnerabilitySummary:
        raw = self.gateway.search(VULNERABILITIES_INDEX, build_vulnerability_summary_query())
        buckets = (
            ((raw.get("aggregations") or {}).get("severity") or {}).get("buckets") or []
            if isinstance(raw, dict) else []
        )
        summary = VulnerabilitySummary()
        for bucket in buckets:
            key = str(bucket.get("key", "")).lower()
            count = int(bucket.get("doc_count", 0))
            if key in ("critical", "high", "medium", "low"):
                setattr(summary, key, getattr(summary, key) + count)
            else:
                summary.untriaged += count
        return summary

    def get_logs(
        self,
        agent_id: str | None,
        minutes: int,
        offset: int,
        limit: int,
        log_filter: LogFilter | None = None,
    ) -> Any:
        query = build_log_query(minutes, offset, limit, log_filter, agent_id)
        logger.debug("Alert query: %s", query)
        return self.gateway.search(ALERTS_INDEX, query)
