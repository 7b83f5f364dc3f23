"""Tests for config manager."""

from __future__ import annotations

import os
import stat

import pytest

from wazuh_console.client.errors import ConfigError
from wazuh_console.config.manager import ConfigManager
from wazuh_console.config.models import ConsoleProfile


def _profile(name: str, url: str = "https://wazuh:55000", **kwargs) -> ConsoleProfile:
    return ConsoleProfile(name=name, url=url, username="wazuh", password="pw", **kwargs)


class TestConfigManager:
    def test_load_empty(self, config_manager: ConfigManager):
        assert config_manager.config.profiles == {}
        assert config_manager.config.default_profile is None

    def test_add_profile(self, config_manager: ConfigManager, sample_profile: ConsoleProfile):
        config_manager.add_profile(sample_profile)
        assert "test" in config_manager.config.profiles
        assert config_manager.config.default_profile == "test"

    def test_add_sets_first_as_default(self, config_manager: ConfigManager):
        config_manager.add_profile(_profile("first"))
        config_manager.add_profile(_profile("second"))
        assert config_manager.config.default_profile == "first"

    def test_remove_profile(self, config_manager: ConfigManager, sample_profile: ConsoleProfile):
        config_manager.add_profile(sample_profile)
        assert config_manager.remove_profile("test") is True
        assert "test" not in config_manager.config.profiles

    def test_remove_nonexistent(self, config_manager: ConfigManager):
        assert config_manager.remove_profile("nope") is False

    def test_remove_default_reassigns(self, config_manager: ConfigManager):
        config_manager.add_profile(_profile("a"))
        config_manager.add_profile(_profile("b"))
        config_manager.remove_profile("a")
        assert config_manager.config.default_profile == "b"

    def test_set_default(self, config_manager: ConfigManager):
        config_manager.add_profile(_profile("a"))
        config_manager.add_profile(_profile("b"))
        assert config_manager.set_default("b") is True
        assert config_manager.set_default("missing") is False
        assert config_manager.config.default_profile == "b"

    def test_round_trip(self, tmp_config):
        mgr = ConfigManager(config_path=tmp_config)
        mgr.add_profile(_profile(
            "prod",
            search_url="https://indexer:9200",
            search_username="admin",
            search_password="admin",
            verify_ssl=True,
        ))
        loaded = ConfigManager(config_path=tmp_config).get_profile("prod")
        assert loaded is not None
        assert loaded.search_url == "https://indexer:9200"
        assert loaded.verify_ssl is True
        assert loaded.timeout == 10.0

    def test_defaults_not_written(self, tmp_config):
        mgr = ConfigManager(config_path=tmp_config)
        mgr.add_profile(_profile("dev"))
        text = tmp_config.read_text()
        assert "verify_ssl" not in text
        assert "timeout" not in text
        assert "search_url" not in text

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_file_is_private(self, tmp_config):
        ConfigManager(config_path=tmp_config).add_profile(_profile("dev"))
        assert stat.S_IMODE(tmp_config.stat().st_mode) == 0o600

    def test_invalid_toml(self, tmp_config):
        tmp_config.write_text("default_profile = [")
        with pytest.raises(ConfigError, match="Invalid config file"):
            ConfigManager(config_path=tmp_config).config


class TestResolveProfile:
    def test_from_default_profile(self, config_manager: ConfigManager, sample_profile):
        config_manager.add_profile(sample_profile)
        resolved = config_manager.resolve_profile()
        assert resolved.url == "https://wazuh:55000"
        assert resolved.username == "wazuh"
        assert resolved.search_url is None

    def test_flags_override_profile(self, config_manager: ConfigManager, sample_profile):
        config_manager.add_profile(sample_profile)
        resolved = config_manager.resolve_profile(
            url="https://other:55000/", password="override",
        )
        assert resolved.url == "https://other:55000"
        assert resolved.password == "override"
        assert resolved.username == "wazuh"

    def test_env_overrides_profile(self, config_manager: ConfigManager, sample_profile, monkeypatch):
        config_manager.add_profile(sample_profile)
        monkeypatch.setenv("WAZUH_URL", "https://env:55000")
        monkeypatch.setenv("WAZUH_SEARCH_URL", "https://env-indexer:9200")
        monkeypatch.setenv("WAZUH_SEARCH_USERNAME", "reader")
        resolved = config_manager.resolve_profile()
        assert resolved.url == "https://env:55000"
        assert resolved.search_url == "https://env-indexer:9200"
        assert resolved.search_username == "reader"

    def test_flag_beats_env(self, config_manager: ConfigManager, monkeypatch):
        monkeypatch.setenv("WAZUH_URL", "https://env:55000")
        monkeypatch.setenv("WAZUH_USERNAME", "env-user")
        monkeypatch.setenv("WAZUH_PASSWORD", "env-pw")
        resolved = config_manager.resolve_profile(url="https://flag:55000")
        assert resolved.url == "https://flag:55000"
        assert resolved.username == "env-user"
        assert resolved.name == "cli"

    def test_profile_from_env(self, config_manager: ConfigManager, monkeypatch):
        config_manager.add_profile(_profile("a", url="https://a:55000"))
        config_manager.add_profile(_profile("b", url="https://b:55000"))
        monkeypatch.setenv("WAZUH_PROFILE", "b")
        assert config_manager.resolve_profile().url == "https://b:55000"

    def test_missing_url(self, config_manager: ConfigManager):
        with pytest.raises(ConfigError, match="No manager URL configured"):
            config_manager.resolve_profile()

    def test_missing_credentials(self, config_manager: ConfigManager):
        with pytest.raises(ConfigError, match="No manager credentials configured"):
            config_manager.resolve_profile(url="https://wazuh:55000")
