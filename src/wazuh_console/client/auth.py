"""Credential storage and authentication strategies for the Wazuh API."""

from __future__ import annotations

import threading
from collections.abc import Generator

import httpx

from wazuh_console.config.models import ConsoleProfile


class CredentialCell:
    """Holds the bearer token shared by every clone of a gateway.

    Each read and each write takes the lock on its own. Callers that see an
    empty cell at the same moment may both authenticate; the last write wins.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._token: str | None = None

    def get(self) -> str | None:
        with self._lock:
            return self._token

    def set(self, token: str) -> None:
        with self._lock:
            self._token = token


class BearerTokenAuth(httpx.Auth):
    """Attach a JWT issued by the manager as an Authorization bearer header."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


class BasicAuth(httpx.BasicAuth):
    """HTTP Basic auth wrapper."""


def manager_basic_auth(profile: ConsoleProfile) -> BasicAuth:
    """Basic credentials used for the token exchange."""
    return BasicAuth(profile.username, profile.password)


def search_basic_auth(profile: ConsoleProfile) -> BasicAuth | None:
    """Basic credentials for the indexer, if both halves are configured."""
    if profile.search_username and profile.search_password:
        return BasicAuth(profile.search_username, profile.search_password)
    return None
