"""Integration tests for config commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import httpx
import respx
from typer.testing import CliRunner

from conftest import auth_response
from wazuh_console.app import app
from wazuh_console.config.manager import ConfigManager

runner = CliRunner()

ADD = ["--url", "https://wazuh:55000", "--username", "wazuh", "--password", "s3cret"]


def _patch_manager(tmp_path: Path):
    """Patch ConfigManager to use a temp config file."""
    config_path = tmp_path / "config.toml"
    return patch(
        "wazuh_console.commands.config_cmd._get_manager",
        side_effect=lambda: ConfigManager(config_path=config_path),
    )


class TestConfigCommands:
    def test_list_empty(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "list"])
            assert result.exit_code == 0
            assert "No profiles configured" in result.output

    def test_add_and_list(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "add", "dev", *ADD])
            assert result.exit_code == 0
            assert "added" in result.output

            result = runner.invoke(app, ["config", "list", "--format", "json"])
            assert result.exit_code == 0
            assert '"dev"' in result.output
            assert "s3cret" not in result.output

    def test_add_invalid_url(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, [
                "config", "add", "dev", "--url", "wazuh:55000",
                "--username", "u", "--password", "p",
            ])
            assert result.exit_code == 1

    def test_show_masks_passwords(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            runner.invoke(app, [
                "config", "add", "dev", *ADD,
                "--search-url", "https://indexer:9200",
                "--search-username", "admin", "--search-password", "idx-secret",
            ])
            result = runner.invoke(app, ["config", "show", "dev", "--format", "json"])
            assert result.exit_code == 0
            assert "s3cret" not in result.output
            assert "idx-secret" not in result.output
            assert "https://indexer:9200" in result.output

    def test_show_nonexistent(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "show", "nope"])
            assert result.exit_code == 1

    def test_set_default(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "a", *ADD])
            runner.invoke(app, ["config", "add", "b", *ADD])
            result = runner.invoke(app, ["config", "set-default", "b"])
            assert result.exit_code == 0
            assert ConfigManager(config_path=tmp_path / "config.toml").config.default_profile == "b"

    def test_set_default_missing(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "set-default", "nope"])
            assert result.exit_code == 1

    def test_remove_force(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "dev", *ADD])
            result = runner.invoke(app, ["config", "remove", "dev", "--force"])
            assert result.exit_code == 0
            assert "removed" in result.output

    def test_init_wizard(self, tmp_path: Path):
        answers = [
            "lab",                        # profile name
            "https://wazuh.lab:55000",    # manager URL
            "wazuh-wui",                  # username
            "pw",                         # password
            "https://wazuh.lab:9200",     # indexer URL
            "admin",                      # indexer username
            "idx",                        # indexer password
        ]
        with (
            _patch_manager(tmp_path),
            patch("wazuh_console.commands.config_cmd.Prompt.ask", side_effect=answers) as ask,
            patch("wazuh_console.commands.config_cmd.Confirm.ask", return_value=False),
        ):
            result = runner.invoke(app, ["config", "init"])
            assert result.exit_code == 0, result.output
        masked = [c.args[0] for c in ask.call_args_list if c.kwargs.get("password")]
        assert masked == ["Password", "Indexer password"]
        profile = ConfigManager(config_path=tmp_path / "config.toml").get_profile("lab")
        assert profile is not None
        assert profile.username == "wazuh-wui"
        assert profile.search_url == "https://wazuh.lab:9200"
        assert profile.verify_ssl is False

    @respx.mock
    def test_test_command(self, tmp_path: Path):
        respx.post("https://wazuh:55000/security/user/authenticate").mock(
            return_value=httpx.Response(200, json=auth_response())
        )
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "dev", *ADD])
            result = runner.invoke(app, ["config", "test"])
            assert result.exit_code == 0, result.output
            assert "Connected!" in result.output

    @respx.mock
    def test_test_command_bad_credentials(self, tmp_path: Path):
        respx.post("https://wazuh:55000/security/user/authenticate").mock(
            return_value=httpx.Response(401)
        )
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "dev", *ADD])
            result = runner.invoke(app, ["config", "test", "dev"])
            assert result.exit_code == 3
            assert "config init" in result.output
