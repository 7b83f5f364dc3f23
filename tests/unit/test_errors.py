"""Tests for error_handler and custom exceptions."""

from __future__ import annotations

import pytest

from wazuh_console.client.errors import (
    AuthError,
    ConfigError,
    DeserializationError,
    HttpStatusError,
    TransportError,
    WazuhConsoleError,
    error_handler,
)


class TestExceptionHierarchy:
    def test_base_error(self):
        exc = WazuhConsoleError("test")
        assert str(exc) == "test"
        assert exc.exit_code == 1

    def test_transport_error(self):
        exc = TransportError("cannot connect")
        assert isinstance(exc, WazuhConsoleError)
        assert exc.exit_code == 2

    def test_auth_error(self):
        exc = AuthError("Authentication failed with status: 401", status_code=401)
        assert isinstance(exc, WazuhConsoleError)
        assert exc.exit_code == 3
        assert exc.status_code == 401

    def test_http_status_error(self):
        exc = HttpStatusError(500, "boom")
        assert exc.exit_code == 4
        assert exc.status_code == 500
        assert exc.body == "boom"
        assert str(exc) == "Request failed with status 500: boom"

    def test_config_error(self):
        exc = ConfigError("Search URL not configured")
        assert exc.exit_code == 6

    def test_deserialization_error(self):
        assert str(DeserializationError()) == "Unexpected response shape"
        assert "missing token" in str(DeserializationError("missing token"))
        assert DeserializationError().exit_code == 7


class TestErrorHandler:
    def test_passes_through_on_success(self):
        @error_handler
        def ok():
            return 42

        assert ok() == 42

    def test_console_error_exits_with_code(self):
        @error_handler
        def fail():
            raise HttpStatusError(404, "not found")

        with pytest.raises(SystemExit) as exc_info:
            fail()
        assert exc_info.value.code == 4

    def test_auth_error_prints_setup_hint(self, capsys):
        @error_handler
        def fail():
            raise AuthError("Authentication failed with status: 401")

        with pytest.raises(SystemExit) as exc_info:
            fail()
        assert exc_info.value.code == 3
        assert "config init" in capsys.readouterr().err

    def test_value_error_exits_1(self):
        @error_handler
        def fail():
            raise ValueError("bad input")

        with pytest.raises(SystemExit) as exc_info:
            fail()
        assert exc_info.value.code == 1
