"""Spawn background fetch and mutation operations.

Each command submits one task to a thread pool. The task gets its own clone
of the gateway, runs its steps in order and reports only by putting
:data:`DataUpdate` messages on the shared queue. Tasks are never cancelled
and nothing orders one task's messages against another's.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from wazuh_console.client.api import WazuhAPI, extract_hits, extract_total
from wazuh_console.client.gateway import WazuhGateway
from wazuh_console.config.constants import (
    DASHBOARD_LOG_LIMIT,
    DEFAULT_CONFIG_COMPONENT,
    DEFAULT_LOG_LIMIT,
)
from wazuh_console.pipeline import stats
from wazuh_console.pipeline.messages import (
    AgentConfigUpdated,
    AgentHardwareUpdated,
    AgentLogsUpdated,
    AgentProcessesUpdated,
    AgentProgramsUpdated,
    AgentsUpdated,
    AgentVulnerabilitiesUpdated,
    AlertHistoryUpdated,
    DataUpdate,
    ErrorPopupRaised,
    ErrorRaised,
    GroupAgentsUpdated,
    GroupsUpdated,
    NotificationLevel,
    NotificationPosted,
    SecurityEventsUpdated,
    ThreatStatsUpdated,
    TopAgentsUpdated,
    VulnSummaryUpdated,
)
from wazuh_console.query.builder import LogFilter

logger = logging.getLogger(__name__)

Post = Callable[[DataUpdate], None]
Operation = Callable[[WazuhAPI, Post], None]
ErrorFactory = Callable[[Exception], DataUpdate]


def _error(prefix: str) -> ErrorFactory:
    return lambda exc: ErrorRaised(f"{prefix}: {exc}")


def _popup(title: str, prefix: str) -> ErrorFactory:
    return lambda exc: ErrorPopupRaised(title=title, message=f"{prefix}: {exc}")


def _failed(prefix: str) -> ErrorFactory:
    return lambda exc: NotificationPosted(f"{prefix}: {exc}", NotificationLevel.ERROR)


def attempt(post: Post, step: Callable[[], Any], on_error: ErrorFactory) -> bool:
    """Run one step; on failure post the converted error and return False."""
    try:
        step()
    except Exception as exc:
        logger.warning("Background step failed: %s", exc)
        logger.debug("Step traceback", exc_info=True)
        post(on_error(exc))
        return False
    return True


class UpdatePipeline:
    """Command surface that turns data needs into background tasks."""

    def __init__(
        self,
        gateway: WazuhGateway,
        *,
        max_workers: int = 8,
        updates: queue.Queue[DataUpdate] | None = None,
    ) -> None:
        self.gateway = gateway
        self.updates: queue.Queue[DataUpdate] = updates if updates is not None else queue.Queue()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="wazuh-fetch",
        )
        self._lock = threading.Lock()
        self._inflight: set[Future[None]] = set()

    def __enter__(self) -> UpdatePipeline:
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown()

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._inflight)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def post(self, message: DataUpdate) -> None:
        self.updates.put(message)

    def spawn(self, name: str, operation: Operation, on_error: ErrorFactory) -> Future[None]:
        """Run *operation* on the pool with its own gateway clone."""
        gateway = self.gateway.clone()

        def run() -> None:
            logger.debug("Task %s started", name)
            attempt(self.post, lambda: operation(WazuhAPI(gateway), self.post), on_error)
            logger.debug("Task %s finished", name)

        future = self._executor.submit(run)
        with self._lock:
            self._inflight.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future[None]) -> None:
        with self._lock:
            self._inflight.discard(future)

    # Fetch commands

    def refresh_agents(self, group: str | None = None) -> Future[None]:
        def op(api: WazuhAPI, post: Post) -> None:
            agents = api.list_agents(group).affected_items
            if group and group != "all":
                post(GroupAgentsUpdated(agents))
            else:
                post(AgentsUpdated(agents))

        return self.spawn("agents", op, _error("Failed to load agents"))

    def refresh_groups(self) -> Future[None]:
        def op(api: WazuhAPI, post: Post) -> None:
            post(GroupsUpdated(api.get_groups().affected_items))

        return self.spawn("groups", op, _error("Failed to load groups"))

    def refresh_dashboard(self, minutes: int) -> Future[None]:
        search = self.gateway.profile.search_configured

        def op(api: WazuhAPI, post: Post) -> None:
            attempt(
                post,
                lambda: post(AgentsUpdated(api.list_agents().affected_items)),
                _error("Failed to load agents"),
            )
            attempt(
                post,
                lambda: post(GroupsUpdated(api.get_groups().affected_items)),
                _error("Failed to load groups"),
            )
            if search:
                attempt(post, lambda: _post_alert_stats(api, post, minutes), _error("Failed to load logs"))
                attempt(
                    post,
                    lambda: post(VulnSummaryUpdated(api.get_vulnerability_summary())),
                    _error("Failed to load vulnerability summary"),
                )
            post(NotificationPosted("Data refreshed", NotificationLevel.SUCCESS))

        return self.spawn("dashboard", op, _error("Refresh failed"))

    def refresh_security_events(
        self,
        minutes: int,
        offset: int = 0,
        limit: int = DEFAULT_LOG_LIMIT,
        log_filter: LogFilter | None = None,
    ) -> Future[None]:
        def op(api: WazuhAPI, post: Post) -> None:
            response = api.get_logs(None, minutes, offset, limit, log_filter)
            post(SecurityEventsUpdated(extract_hits(response), extract_total(response)))

        return self.spawn("security-events", op, _error("Failed to load logs"))

    def inspect_agent(
        self,
        agent_id: str,
        minutes: int,
        config_component: str = DEFAULT_CONFIG_COMPONENT,
    ) -> Future[None]:
        """Load every inspector slice for one agent, one step after another."""

        def hardware(api: WazuhAPI, post: Post) -> None:
            items = api.get_hardware_info(agent_id).affected_items
            if items:
                post(AgentHardwareUpdated(items[0]))

        def op(api: WazuhAPI, post: Post) -> None:
            attempt(post, lambda: hardware(api, post), _error("Failed to load hardware"))
            attempt(
                post,
                lambda: post(AgentProcessesUpdated(api.get_processes(agent_id).affected_items)),
                _error("Failed to load processes"),
            )
            attempt(
                post,
                lambda: post(AgentProgramsUpdated(api.get_programs(agent_id).affected_items)),
                _error("Failed to load packages"),
            )
            attempt(
                post,
                lambda: post(AgentVulnerabilitiesUpdated(
                    api.get_vulnerabilities(agent_id).affected_items,
                )),
                _popup("Vulnerabilities Error", "Failed to load vulnerabilities"),
            )
            attempt(
                post,
                lambda: post(AgentLogsUpdated(
                    extract_hits(api.get_logs(agent_id, minutes, 0, DASHBOARD_LOG_LIMIT)),
                )),
                _error("Failed to load logs"),
            )
            attempt(
                post,
                lambda: post(AgentConfigUpdated(
                    config_component, api.get_agent_config(agent_id, config_component),
                )),
                _popup("Config Error", "Failed to load config"),
            )

        return self.spawn(f"inspect-{agent_id}", op, _error("Inspection failed"))

    def refresh_agent_config(self, agent_id: str, component: str) -> Future[None]:
        def op(api: WazuhAPI, post: Post) -> None:
            post(AgentConfigUpdated(component, api.get_agent_config(agent_id, component)))

        return self.spawn("agent-config", op, _error("Failed to load config"))

    def refresh_agent_vulnerabilities(self, agent_id: str) -> Future[None]:
        def op(api: WazuhAPI, post: Post) -> None:
            post(AgentVulnerabilitiesUpdated(api.get_vulnerabilities(agent_id).affected_items))

        return self.spawn("agent-vulns", op, _error("Failed to load vulnerabilities"))

    def refresh_vulnerability_summary(self) -> Future[None]:
        def op(api: WazuhAPI, post: Post) -> None:
            post(VulnSummaryUpdated(api.get_vulnerability_summary()))

        return self.spawn("vuln-summary", op, _error("Failed to load vulnerability summary"))

    # Mutation commands

    def restart_agents(self, agent_ids: Sequence[str]) -> Future[None]:
        ids = list(agent_ids)
        self.post(NotificationPosted(f"Restarting {len(ids)} agents..."))

        def op(api: WazuhAPI, post: Post) -> None:
            api.restart_agents(ids)
            post(NotificationPosted(
                f"Restart signal sent to {len(ids)} agents", NotificationLevel.SUCCESS,
            ))

        return self.spawn("restart", op, _failed("Restart failed"))

    def upgrade_agents(self, agent_ids: Sequence[str]) -> Future[None]:
        ids = list(agent_ids)
        self.post(NotificationPosted(f"Starting upgrade for {len(ids)} agents..."))

        def op(api: WazuhAPI, post: Post) -> None:
            api.upgrade_agents(ids)
            post(NotificationPosted(
                f"Upgrade started for {len(ids)} agents", NotificationLevel.SUCCESS,
            ))

        return self.spawn("upgrade", op, _failed("Upgrade failed"))

    def assign_agents(self, group_id: str, agent_ids: Sequence[str]) -> Future[None]:
        ids = list(agent_ids)

        def op(api: WazuhAPI, post: Post) -> None:
            api.assign_agents_to_group(group_id, ids)
            post(NotificationPosted(
                f"{len(ids)} agents assigned to {group_id}", NotificationLevel.SUCCESS,
            ))

        return self.spawn("assign", op, _failed("Assignment failed"))

    def remove_agents(self, group_id: str, agent_ids: Sequence[str]) -> Future[None]:
        ids = list(agent_ids)

        def op(api: WazuhAPI, post: Post) -> None:
            api.remove_agents_from_group(group_id, ids)
            post(NotificationPosted(
                f"{len(ids)} agents removed from {group_id}", NotificationLevel.SUCCESS,
            ))

        return self.spawn("unassign", op, _failed("Removal failed"))

    def create_group(self, group_id: str) -> Future[None]:
        def op(api: WazuhAPI, post: Post) -> None:
            api.create_group(group_id)
            post(NotificationPosted(f"Group {group_id} created", NotificationLevel.SUCCESS))
            post(GroupsUpdated(api.get_groups().affected_items))

        return self.spawn("create-group", op, _failed("Group creation failed"))

    def delete_group(self, group_id: str) -> Future[None]:
        def op(api: WazuhAPI, post: Post) -> None:
            api.delete_group(group_id)
            post(NotificationPosted(f"Group {group_id} deleted", NotificationLevel.SUCCESS))
            post(GroupsUpdated(api.get_groups().affected_items))

        return self.spawn("delete-group", op, _failed("Group deletion failed"))

    def push_agent_config(self, agent_id: str, component: str, config: Any) -> Future[None]:
        self.post(NotificationPosted(f"Pushing config update to {agent_id}..."))

        def op(api: WazuhAPI, post: Post) -> None:
            api.update_agent_config(agent_id, component, config)
            post(NotificationPosted(
                "Configuration updated successfully", NotificationLevel.SUCCESS,
            ))

        return self.spawn("push-config", op, _failed("Update failed"))


def _post_alert_stats(api: WazuhAPI, post: Post, minutes: int) -> None:
    hits = extract_hits(api.get_logs(None, minutes, 0, DASHBOARD_LOG_LIMIT))
    post(ThreatStatsUpdated(stats.threat_stats(hits)))
    post(AlertHistoryUpdated(stats.alert_history(hits)))
    post(TopAgentsUpdated(stats.top_agents(hits)))
