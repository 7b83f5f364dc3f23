"""Tests for table rendering helpers."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from wazuh_console.output.tables import (
    kv_table,
    level_style,
    make_table,
    styled_severity,
    styled_status,
)


def _render(renderable) -> str:
    buf = StringIO()
    Console(file=buf, force_terminal=True, width=80).print(renderable)
    return buf.getvalue()


class TestTables:
    def test_make_table(self):
        out = _render(make_table("Test", ["A", "B"], [["1", "2"], ["3", None]]))
        assert "Test" in out
        assert "3" in out

    def test_kv_table(self):
        out = _render(kv_table({"key1": "val1", "key2": None}, title="KV"))
        assert "key1" in out
        assert "val1" in out


class TestStyles:
    def test_status(self):
        assert styled_status("active").style == "green"
        assert styled_status("Disconnected").style == "red"
        assert styled_status("unknown").style == ""

    def test_severity(self):
        assert styled_severity("Critical").style == "bold red"
        assert styled_severity("-").style == ""

    def test_level_buckets(self):
        assert level_style(15) == "bold red"
        assert level_style(12) == "red"
        assert level_style(7) == "yellow"
        assert level_style(3) == ""
