"""Authenticated HTTP gateway for the Wazuh manager and indexer."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from wazuh_console.client.auth import (
    BearerTokenAuth,
    CredentialCell,
    manager_basic_auth,
    search_basic_auth,
)
from wazuh_console.client.errors import (
    AuthError,
    ConfigError,
    DeserializationError,
    HttpStatusError,
    TransportError,
)
from wazuh_console.config.constants import AUTH_PATH
from wazuh_console.config.models import ConsoleProfile

logger = logging.getLogger(__name__)


class WazuhGateway:
    """Synchronous HTTP client that owns the manager bearer token.

    The token lives in a :class:`CredentialCell`. Clones made with
    :meth:`clone` share the cell and the connection pool, so a token obtained
    by one background operation is reused by all the others.
    """

    def __init__(
        self,
        profile: ConsoleProfile,
        *,
        credentials: CredentialCell | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.profile = profile
        self.base_url = profile.url
        self.credentials = credentials or CredentialCell()
        self._owns_client = http_client is None
        if http_client is None:
            if not profile.verify_ssl:
                logger.warning(
                    "TLS certificate verification is disabled for %s", profile.url
                )
            http_client = httpx.Client(
                base_url=self.base_url,
                verify=profile.verify_ssl,
                timeout=profile.timeout,
                headers={"Accept": "application/json"},
            )
        self._client = http_client

    def clone(self) -> WazuhGateway:
        return WazuhGateway(
            self.profile, credentials=self.credentials, http_client=self._client,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> WazuhGateway:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        target = self.profile.url if url.startswith("/") else url
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Request to {target} timed out: {exc}") from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise TransportError(f"Invalid URL {target}: {exc}") from exc
        except httpx.TransportError as exc:
            raise TransportError(f"Cannot connect to {target}: {exc}") from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def authenticate(self) -> str:
        """Exchange basic credentials for a bearer token and cache it."""
        logger.info("Authenticating against %s as %s", self.base_url, self.profile.username)
        response = self._send("POST", AUTH_PATH, auth=manager_basic_auth(self.profile))
        if not response.is_success:
            raise AuthError(
                f"Authentication failed with status: {response.status_code}",
                status_code=response.status_code,
            )
        try:
            token = response.json()["data"]["token"]
        except (json.JSONDecodeError, KeyError, TypeError) as exc:
            raise DeserializationError(f"authentication response: {exc}") from exc
        if not isinstance(token, str):
            raise DeserializationError("authentication token is not a string")
        self.credentials.set(token)
        return token

    def _token(self) -> str:
        token = self.credentials.get()
        if token is not None:
            return token
        return self.authenticate()

    def execute(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send an authorized request to the manager.

        A 401 triggers one reauthentication and one retry of the same request.
        Any other failure is raised as :class:`HttpStatusError`.
        """
        kwargs: dict[str, Any] = {"params": params}
        if json is not None:
            kwargs["json"] = json

        response = self._send(method, path, auth=BearerTokenAuth(self._token()), **kwargs)
        if response.status_code == 401:
            logger.warning("Token rejected for %s %s, reauthenticating", method, path)
            token = self.authenticate()
            response = self._send(method, path, auth=BearerTokenAuth(token), **kwargs)
        if not response.is_success:
            raise HttpStatusError(response.status_code, response.text)
        return response

    def execute_json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self.execute(method, path, **kwargs)
        return _decode(response)

    def get_json(self, path: str, **kwargs: Any) -> Any:
        return self.execute_json("GET", path, **kwargs)

    def require_search(self) -> str:
        if not self.profile.search_url:
            raise ConfigError("Search URL not configured")
        return self.profile.search_url

    def search(self, index_pattern: str, query: dict[str, Any]) -> Any:
        """Run a query document against the indexer's ``_search`` endpoint."""
        url = f"{self.require_search()}/{index_pattern}/_search"
        response = self._send(
            "POST", url, json=query, auth=search_basic_auth(self.profile),
        )
        if not response.is_success:
            raise HttpStatusError(response.status_code, response.text)
        return _decode(response)


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DeserializationError(str(exc)) from exc
