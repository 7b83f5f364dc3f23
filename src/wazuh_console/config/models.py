"""Pydantic models for console configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wazuh_console.config.constants import DEFAULT_TIMEOUT


def _check_url(v: str) -> str:
    if not v.startswith(("http://", "https://")):
        raise ValueError("URL must start with http:// or https://")
    return v.rstrip("/")


class ConsoleProfile(BaseModel):
    """A named connection profile: manager API plus optional indexer."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = Field(description="Manager API base URL, e.g. https://wazuh:55000")
    username: str = Field(description="Manager API username")
    password: str = Field(description="Manager API password")
    search_url: str | None = Field(
        default=None, description="Indexer base URL, e.g. https://wazuh:9200",
    )
    search_username: str | None = Field(default=None, description="Indexer username")
    search_password: str | None = Field(default=None, description="Indexer password")
    # Wazuh deployments ship self-signed certificates.
    verify_ssl: bool = Field(default=False, description="Verify SSL certificates")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Request timeout in seconds",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _check_url(v)

    @field_validator("search_url")
    @classmethod
    def validate_search_url(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        return _check_url(v)

    @property
    def search_configured(self) -> bool:
        return self.search_url is not None


class ConsoleConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    default_format: str = "table"
    profiles: dict[str, ConsoleProfile] = Field(default_factory=dict)
