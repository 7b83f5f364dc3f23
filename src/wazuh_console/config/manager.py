"""Configuration manager — read/write TOML config, resolve profiles."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w

from wazuh_console.client.errors import ConfigError
from wazuh_console.config.constants import (
    CONFIG_FILE,
    DEFAULT_TIMEOUT,
    ENV_PASSWORD,
    ENV_PROFILE,
    ENV_SEARCH_PASSWORD,
    ENV_SEARCH_URL,
    ENV_SEARCH_USERNAME,
    ENV_URL,
    ENV_USERNAME,
)
from wazuh_console.config.models import ConsoleConfig, ConsoleProfile

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


class ConfigManager:
    """Manages console configuration on disk and resolves connection profiles."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: ConsoleConfig | None = None

    @property
    def config(self) -> ConsoleConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> ConsoleConfig:
        if not self.config_path.exists():
            return ConsoleConfig()
        raw = self.config_path.read_bytes()
        try:
            data = tomllib.loads(raw.decode())
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid config file {self.config_path}: {exc}") from exc
        profiles: dict[str, ConsoleProfile] = {}
        for name, prof_data in data.get("profiles", {}).items():
            profiles[name] = ConsoleProfile(name=name, **prof_data)
        return ConsoleConfig(
            default_profile=data.get("default_profile"),
            default_format=data.get("default_format", "table"),
            profiles=profiles,
        )

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        # Owner-only: profiles hold passwords
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = {}
        if self.config.default_profile:
            data["default_profile"] = self.config.default_profile
        if self.config.default_format != "table":
            data["default_format"] = self.config.default_format
        if self.config.profiles:
            data["profiles"] = {}
            for name, profile in self.config.profiles.items():
                prof_dict = profile.model_dump(exclude={"name"}, exclude_none=True)
                if prof_dict.get("verify_ssl") is False:
                    del prof_dict["verify_ssl"]
                if prof_dict.get("timeout") == DEFAULT_TIMEOUT:
                    del prof_dict["timeout"]
                data["profiles"][name] = prof_dict
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.rename(self.config_path)

    def add_profile(self, profile: ConsoleProfile) -> None:
        self.config.profiles[profile.name] = profile
        if not self.config.default_profile:
            self.config.default_profile = profile.name
        self.save()

    def remove_profile(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        del self.config.profiles[name]
        if self.config.default_profile == name:
            self.config.default_profile = next(iter(self.config.profiles), None)
        self.save()
        return True

    def set_default(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        self.config.default_profile = name
        self.save()
        return True

    def get_profile(self, name: str | None = None) -> ConsoleProfile | None:
        if name:
            return self.config.profiles.get(name)
        default = self.config.default_profile
        if default:
            return self.config.profiles.get(default)
        return None

    def resolve_profile(
        self,
        profile_name: str | None = None,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        search_url: str | None = None,
    ) -> ConsoleProfile:
        """Resolve the connection profile.

        Precedence: CLI flags > env vars > config profile.
        """
        env = os.environ
        profile = self.get_profile(profile_name or env.get(ENV_PROFILE))

        def pick(flag: str | None, env_name: str, attr: str) -> Any:
            if flag:
                return flag
            if env.get(env_name):
                return env[env_name]
            return getattr(profile, attr) if profile else None

        resolved_url = pick(url, ENV_URL, "url")
        resolved_user = pick(username, ENV_USERNAME, "username")
        resolved_password = pick(password, ENV_PASSWORD, "password")

        if not resolved_url:
            raise ConfigError(
                "No manager URL configured. Use 'wazuh-console config add' or set "
                f"{ENV_URL} or pass --url."
            )
        if not resolved_user or not resolved_password:
            raise ConfigError(
                "No manager credentials configured. Set "
                f"{ENV_USERNAME}/{ENV_PASSWORD} or pass --username/--password."
            )

        return ConsoleProfile(
            name=profile.name if profile else "cli",
            url=resolved_url.rstrip("/"),
            username=resolved_user,
            password=resolved_password,
            search_url=pick(search_url, ENV_SEARCH_URL, "search_url"),
            search_username=pick(None, ENV_SEARCH_USERNAME, "search_username"),
            search_password=pick(None, ENV_SEARCH_PASSWORD, "search_password"),
            verify_ssl=profile.verify_ssl if profile else False,
            timeout=profile.timeout if profile else DEFAULT_TIMEOUT,
        )
