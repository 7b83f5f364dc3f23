"""Tests for the agent filter language."""

from __future__ import annotations

import pytest

from wazuh_console.filters.agent_filter import (
    AgentFilter,
    FilterPredicate,
    PredicateKind,
    parse_predicates,
)
from wazuh_console.models.agent import Agent, AgentOS


@pytest.fixture
def web_server() -> Agent:
    return Agent(
        id="001",
        name="Web-Server-01",
        ip="192.168.1.10",
        status="active",
        os=AgentOS(name="Ubuntu Linux"),
    )


def _pred(kind: PredicateKind, value: int | str) -> FilterPredicate:
    return FilterPredicate(kind=kind, value=value)


class TestParse:
    def test_fields_and_severity(self):
        predicates = parse_predicates("name:web st:active sev:high")
        assert len(predicates) == 3
        assert set(predicates) == {
            _pred(PredicateKind.NAME, "web"),
            _pred(PredicateKind.STATUS, "active"),
            _pred(PredicateKind.SEVERITY, 8),
        }

    @pytest.mark.parametrize(
        ("token", "level"),
        [
            ("sev:critical", 12),
            ("sev:crit", 12),
            ("sev:high", 8),
            ("sev:medium", 4),
            ("sev:med", 4),
            ("sev:low", 0),
            ("sev:7", 7),
            ("s:HIGH", 8),
        ],
    )
    def test_severity_tiers(self, token, level):
        assert parse_predicates(token) == [_pred(PredicateKind.SEVERITY, level)]

    def test_unparsable_severity_is_dropped(self):
        assert parse_predicates("sev:bogus") == []
        assert parse_predicates("sev:-3 name:db") == [_pred(PredicateKind.NAME, "db")]

    def test_aliases_are_case_insensitive(self):
        assert parse_predicates("N:Web ST:Active IP:10.0 ID:001 OS:Ubuntu") == [
            _pred(PredicateKind.NAME, "web"),
            _pred(PredicateKind.STATUS, "active"),
            _pred(PredicateKind.IP, "10.0"),
            _pred(PredicateKind.ID, "001"),
            _pred(PredicateKind.OS, "ubuntu"),
        ]

    def test_unknown_key_becomes_global(self):
        assert parse_predicates("Group:Linux") == [_pred(PredicateKind.GLOBAL, "group:linux")]

    def test_bare_token_is_global(self):
        assert parse_predicates("  01  ") == [_pred(PredicateKind.GLOBAL, "01")]

    def test_empty(self):
        assert parse_predicates("") == []
        assert parse_predicates("   ") == []

    def test_reparse_is_stable(self):
        query = "name:web st:active sev:high 10.0"
        assert AgentFilter.parse(query) == AgentFilter.parse(query)


class TestMatch:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("os:ubuntu", True),
            ("os:windows", False),
            ("st:active", True),
            ("st:act", False),
            ("01", True),
            ("192.168", True),
            ("name:WEB-server", True),
            ("id:00", True),
            ("ip:10.0.0", False),
            ("sev:critical", True),
            ("nothing-here", False),
            ("name:web st:disconnected", False),
        ],
    )
    def test_web_server(self, web_server, query, expected):
        assert AgentFilter.parse(query).matches(web_server) is expected

    def test_empty_filter_matches_everything(self, web_server):
        assert AgentFilter.parse("").matches(web_server)

    def test_os_without_os_info(self):
        bare = Agent(id="002", name="db", status="active")
        assert not AgentFilter.parse("os:linux").matches(bare)
        assert AgentFilter.parse("db").matches(bare)

    def test_global_without_ip(self):
        bare = Agent(id="003", name="edge", status="active")
        assert not AgentFilter.parse("10.0").matches(bare)

    def test_apply_keeps_order(self, web_server):
        other = Agent(id="002", name="web-02", ip="10.0.0.2", status="disconnected")
        third = Agent(id="003", name="db-01", ip="10.0.0.3", status="active")
        assert AgentFilter.parse("web").apply([web_server, other, third]) == [web_server, other]
