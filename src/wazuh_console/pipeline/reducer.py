"""Single-writer reducer draining pipeline messages into the state."""

from __future__ import annotations

import logging
import queue
import time
from functools import singledispatchmethod

from wazuh_console.config.constants import NOTIFICATION_TTL_SECONDS
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
    NotificationPosted,
    SecurityEventsUpdated,
    ThreatStatsUpdated,
    TopAgentsUpdated,
    VulnSummaryUpdated,
)
from wazuh_console.pipeline.state import AppState, Notification

logger = logging.getLogger(__name__)


class StateReducer:
    """Applies messages to one :class:`AppState` in arrival order.

    Every message replaces its slice outright. There is no merging and no
    versioning, so a late result overwrites a fresher one.
    """

    def __init__(
        self,
        state: AppState,
        updates: queue.Queue[DataUpdate],
        *,
        notification_ttl: float = NOTIFICATION_TTL_SECONDS,
    ) -> None:
        self.state = state
        self.updates = updates
        self.notification_ttl = notification_ttl

    def tick(self) -> int:
        """Drain every queued message without blocking; return how many applied."""
        applied = 0
        while True:
            try:
                message = self.updates.get_nowait()
            except queue.Empty:
                break
            self.apply(message)
            applied += 1
        self.expire_notifications()
        return applied

    def expire_notifications(self, now: float | None = None) -> None:
        now = time.monotonic() if now is None else now
        self.state.notifications = [
            n for n in self.state.notifications
            if now - n.timestamp < self.notification_ttl
        ]

    @singledispatchmethod
    def apply(self, message: object) -> None:
        logger.warning("Ignoring unknown message %r", message)

    @apply.register
    def _(self, message: AgentsUpdated) -> None:
        self.state.agents = list(message.agents)
        self.state.sort_agents()

    @apply.register
    def _(self, message: GroupAgentsUpdated) -> None:
        self.state.agents = list(message.agents)
        self.state.sort_agents()

    @apply.register
    def _(self, message: GroupsUpdated) -> None:
        self.state.groups = list(message.groups)

    @apply.register
    def _(self, message: SecurityEventsUpdated) -> None:
        self.state.security_events = list(message.events)
        self.state.security_events_total = message.total

    @apply.register
    def _(self, message: VulnSummaryUpdated) -> None:
        self.state.vuln_summary = message.summary

    @apply.register
    def _(self, message: ThreatStatsUpdated) -> None:
        self.state.threat_stats = message.stats

    @apply.register
    def _(self, message: AlertHistoryUpdated) -> None:
        self.state.alert_history = list(message.buckets)

    @apply.register
    def _(self, message: TopAgentsUpdated) -> None:
        self.state.top_agents = list(message.agents)

    @apply.register
    def _(self, message: AgentHardwareUpdated) -> None:
        self.state.hardware = message.hardware

    @apply.register
    def _(self, message: AgentProcessesUpdated) -> None:
        self.state.processes = list(message.processes)

    @apply.register
    def _(self, message: AgentProgramsUpdated) -> None:
        self.state.programs = list(message.programs)

    @apply.register
    def _(self, message: AgentVulnerabilitiesUpdated) -> None:
        self.state.vulnerabilities = list(message.vulnerabilities)

    @apply.register
    def _(self, message: AgentLogsUpdated) -> None:
        self.state.agent_logs = list(message.events)

    @apply.register
    def _(self, message: AgentConfigUpdated) -> None:
        self.state.agent_config = message.config
        self.state.agent_config_component = message.component

    @apply.register
    def _(self, message: NotificationPosted) -> None:
        self.state.notifications.append(Notification(message.message, message.level))

    @apply.register
    def _(self, message: ErrorRaised) -> None:
        self.state.error_message = message.message

    @apply.register
    def _(self, message: ErrorPopupRaised) -> None:
        self.state.error_popup = (message.title, message.message)
