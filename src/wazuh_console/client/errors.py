"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class WazuhConsoleError(Exception):
    """Base exception for wazuh-console."""

    exit_code: int = 1


class TransportError(WazuhConsoleError):
    """Connection, timeout or URL failure before a response was received."""

    exit_code = 2


class AuthError(WazuhConsoleError):
    """Bad credentials or authentication endpoint failure."""

    exit_code = 3

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class HttpStatusError(WazuhConsoleError):
    """Non-success response outside the 401 reauthentication path."""

    exit_code = 4

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Request failed with status {status_code}: {body}")


class ConfigError(WazuhConsoleError):
    """Missing or invalid configuration (e.g. search endpoint not set)."""

    exit_code = 6


class DeserializationError(WazuhConsoleError):
    """Response body did not have the expected shape."""

    exit_code = 7

    def __init__(self, detail: str = "") -> None:
        super().__init__(
            f"Unexpected response shape: {detail}" if detail else "Unexpected response shape"
        )


def error_handler(func: F) -> F:
    """Decorator that catches WazuhConsoleError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except AuthError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            err_console.print(
                "[dim]Check the manager credentials or run 'wazuh-console config init'.[/]"
            )
            raise SystemExit(exc.exit_code)
        except WazuhConsoleError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
