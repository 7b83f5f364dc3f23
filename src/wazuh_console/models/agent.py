"""Agent data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AgentOS(BaseModel):
    """Operating system reported by an agent."""

    name: str | None = None
    version: str | None = None
    platform: str | None = None
    arch: str | None = None


class Agent(BaseModel):
    """A monitored host."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    ip: str | None = None
    status: str
    version: str | None = None
    node_name: str | None = None
    group: list[str] | None = None
    date_add: str | None = Field(default=None, alias="dateAdd")
    last_keep_alive: str | None = Field(default=None, alias="lastKeepAlive")
    os: AgentOS | None = None
    manager: str | None = None

    @property
    def os_name(self) -> str:
        if self.os is None:
            return ""
        return self.os.name or ""


class AgentSummary(BaseModel):
    """Agent counts by connection status."""

    total: int = 0
    active: int = 0
    disconnected: int = 0
    never_connected: int = 0
