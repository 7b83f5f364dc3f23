"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from wazuh_console.client.gateway import WazuhGateway
from wazuh_console.config.manager import ConfigManager
from wazuh_console.config.models import ConsoleProfile

MANAGER_URL = "https://wazuh:55000"
SEARCH_URL = "https://indexer:9200"
TOKEN = "jwt-token-1"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's WAZUH_* variables out of the tests."""
    for name in (
        "WAZUH_URL",
        "WAZUH_USERNAME",
        "WAZUH_PASSWORD",
        "WAZUH_SEARCH_URL",
        "WAZUH_SEARCH_USERNAME",
        "WAZUH_SEARCH_PASSWORD",
        "WAZUH_PROFILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the default config file at a temp dir."""
    monkeypatch.setattr("wazuh_console.config.manager.CONFIG_FILE", tmp_path / "user" / "config.toml")


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich log output off the captured CLI stream."""
    monkeypatch.setattr("wazuh_console.app.configure_logging", lambda verbose=False: None)


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> ConsoleProfile:
    """Manager-only profile."""
    return ConsoleProfile(
        name="test",
        url=MANAGER_URL,
        username="wazuh",
        password="secret",
    )


@pytest.fixture
def search_profile() -> ConsoleProfile:
    """Profile with the indexer configured."""
    return ConsoleProfile(
        name="test",
        url=MANAGER_URL,
        username="wazuh",
        password="secret",
        search_url=SEARCH_URL,
        search_username="admin",
        search_password="admin",
    )


@pytest.fixture
def gateway(sample_profile: ConsoleProfile):
    with WazuhGateway(sample_profile) as gw:
        yield gw


@pytest.fixture
def search_gateway(search_profile: ConsoleProfile):
    with WazuhGateway(search_profile) as gw:
        yield gw


def auth_response(token: str = TOKEN) -> dict[str, Any]:
    return {"data": {"token": token}, "error": 0}


def items(*entries: dict[str, Any], total: int | None = None) -> dict[str, Any]:
    """Wrap entries the way the manager wraps list responses."""
    return {
        "data": {
            "affected_items": list(entries),
            "total_affected_items": len(entries) if total is None else total,
        },
        "error": 0,
    }


def agent(
    agent_id: str,
    name: str,
    *,
    ip: str = "10.0.0.1",
    status: str = "active",
    os_name: str | None = "Ubuntu Linux",
) -> dict[str, Any]:
    data: dict[str, Any] = {"id": agent_id, "name": name, "ip": ip, "status": status}
    if os_name is not None:
        data["os"] = {"name": os_name, "platform": "ubuntu"}
    return data


def alert(level: int, agent_name: str = "web-01", ts: str = "2024-05-01T10:15:30.000Z") -> dict[str, Any]:
    return {
        "_source": {
            "@timestamp": ts,
            "agent": {"id": "001", "name": agent_name},
            "rule": {"id": "5710", "level": level, "description": "sshd: attempt to login"},
        }
    }
