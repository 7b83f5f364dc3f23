"""Integration tests for group commands."""

from __future__ import annotations

import json

import httpx
import respx
from typer.testing import CliRunner

from conftest import MANAGER_URL, auth_response, items
from wazuh_console.app import app

runner = CliRunner()

CONN = ["--url", MANAGER_URL, "--username", "wazuh", "--password", "pw"]


def _mock_auth() -> None:
    respx.post(f"{MANAGER_URL}/security/user/authenticate").mock(
        return_value=httpx.Response(200, json=auth_response())
    )


def _mock_groups() -> None:
    respx.get(f"{MANAGER_URL}/groups").mock(return_value=httpx.Response(200, json=items(
        {"name": "default", "count": 4},
        {"name": "linux-web", "count": 2},
    )))


class TestGroupCommands:
    @respx.mock
    def test_list(self):
        _mock_auth()
        _mock_groups()
        result = runner.invoke(app, ["groups", "list", *CONN, "--format", "json"])
        assert result.exit_code == 0
        assert [g["name"] for g in json.loads(result.stdout)] == ["default", "linux-web"]

    @respx.mock
    def test_list_filter(self):
        _mock_auth()
        _mock_groups()
        result = runner.invoke(app, ["groups", "list", *CONN, "-q", "WEB", "--format", "json"])
        assert [g["name"] for g in json.loads(result.stdout)] == ["linux-web"]

    @respx.mock
    def test_create(self):
        _mock_auth()
        _mock_groups()
        route = respx.post(f"{MANAGER_URL}/groups").mock(
            return_value=httpx.Response(200, json={"error": 0})
        )
        result = runner.invoke(app, ["groups", "create", "linux-web", *CONN])
        assert result.exit_code == 0, result.output
        assert "Group linux-web created" in result.stdout
        assert json.loads(route.calls.last.request.content) == {"group_id": "linux-web"}

    @respx.mock
    def test_create_failure(self):
        _mock_auth()
        respx.post(f"{MANAGER_URL}/groups").mock(
            return_value=httpx.Response(400, text="already exists")
        )
        result = runner.invoke(app, ["groups", "create", "default", *CONN])
        assert result.exit_code == 1
        assert "Group creation failed" in result.stdout

    @respx.mock
    def test_delete_force(self):
        _mock_auth()
        _mock_groups()
        route = respx.delete(f"{MANAGER_URL}/groups").mock(
            return_value=httpx.Response(200, json={"error": 0})
        )
        result = runner.invoke(app, ["groups", "delete", "linux-web", "--force", *CONN])
        assert result.exit_code == 0, result.output
        assert "Group linux-web deleted" in result.stdout
        assert route.calls.last.request.url.params["groups_list"] == "linux-web"

    def test_delete_cancelled(self):
        result = runner.invoke(app, ["groups", "delete", "linux-web", *CONN], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.stdout

    @respx.mock
    def test_assign(self):
        _mock_auth()
        route = respx.put(f"{MANAGER_URL}/groups/linux-web/agents").mock(
            return_value=httpx.Response(200, json={"error": 0})
        )
        result = runner.invoke(app, ["groups", "assign", "linux-web", "001", "003", *CONN])
        assert result.exit_code == 0, result.output
        assert "2 agents assigned to linux-web" in result.stdout
        assert route.calls.last.request.url.params["agents_list"] == "001,003"

    @respx.mock
    def test_remove(self):
        _mock_auth()
        respx.delete(f"{MANAGER_URL}/groups/linux-web/agents").mock(
            return_value=httpx.Response(200, json={"error": 0})
        )
        result = runner.invoke(app, ["groups", "remove", "linux-web", "001", *CONN])
        assert result.exit_code == 0, result.output
        assert "1 agents removed from linux-web" in result.stdout
