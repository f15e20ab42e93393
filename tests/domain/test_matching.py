"""Tests for trigger matching and invocation parsing."""

from __future__ import annotations

import pytest

from archctl.domain.catalog import RoutingRule
from archctl.domain.matching import (
    match_rules,
    names_responsibility,
    normalize_request,
    parse_invocation,
    trigger_pattern,
)
from archctl.domain.types import Layer

_RULES = (
    RoutingRule(name="model", layers=(Layer.DOMAIN,), triggers=("entity", "value object")),
    RoutingRule(name="http", layers=(Layer.API,), triggers=("endpoint", "api")),
    RoutingRule(name="ui", layers=(Layer.WEB,), triggers=("ui", "page")),
    RoutingRule(name="tools", layers=(Layer.MCP,), triggers=("mcp",)),
    RoutingRule(
        name="crud",
        layers=(Layer.API, Layer.DOMAIN, Layer.APPLICATION),
        triggers=("crud",),
    ),
)


class TestTriggerPattern:
    @pytest.mark.parametrize(
        ("trigger", "text"),
        [
            ("entity", "Add an Entity"),
            ("endpoint", "two endpoints"),
            ("value object", "a value-object for money"),
            ("value object", "a value_object"),
            ("value object", "value   objects"),
            ("page", "pages"),
        ],
    )
    def test_matches(self, trigger: str, text: str) -> None:
        assert trigger_pattern(trigger).search(text)

    @pytest.mark.parametrize(
        ("trigger", "text"),
        [
            ("ui", "build the thing"),
            ("api", "rapid prototyping"),
            ("page", "paged results"),
            ("entity", "identity"),
        ],
    )
    def test_word_boundaries(self, trigger: str, text: str) -> None:
        assert not trigger_pattern(trigger).search(text)


class TestMatchRules:
    def test_single_layer(self) -> None:
        matches = match_rules("Add a Product entity", _RULES)
        assert [m.layer for m in matches] == [Layer.DOMAIN]
        assert matches[0].triggers == ["entity"]
        assert matches[0].rules == ["model"]

    def test_precedence_order(self) -> None:
        matches = match_rules("Build a page with an endpoint for the entity", _RULES)
        assert [m.layer for m in matches] == [Layer.DOMAIN, Layer.API, Layer.WEB]

    def test_mcp_sorted_last(self) -> None:
        matches = match_rules("Expose the entity via MCP", _RULES)
        assert [m.layer for m in matches] == [Layer.DOMAIN, Layer.MCP]

    def test_multi_layer_rule(self) -> None:
        matches = match_rules("crud for orders", _RULES)
        assert [m.layer for m in matches] == [Layer.DOMAIN, Layer.APPLICATION, Layer.API]
        assert all(m.rules == ["crud"] for m in matches)

    def test_evidence_merges_across_rules(self) -> None:
        matches = match_rules("crud endpoint", _RULES)
        api = next(m for m in matches if m.layer is Layer.API)
        assert api.triggers == ["endpoint", "crud"]
        assert api.rules == ["http", "crud"]

    def test_no_match(self) -> None:
        assert match_rules("hello world", _RULES) == []


class TestParseInvocation:
    def test_plain_text(self) -> None:
        assert parse_invocation("  add  an entity ") == (None, "add an entity")

    def test_orchestrator_prefix(self) -> None:
        assert parse_invocation("/orchestrator add a page") == (None, "add a page")

    def test_orchestrator_prefix_case_insensitive(self) -> None:
        assert parse_invocation("/Orchestrator: add a page") == (None, "add a page")

    def test_orchestrator_alone_is_empty(self) -> None:
        assert parse_invocation("/orchestrator") == (None, "")

    def test_direct_invocation(self) -> None:
        target, request = parse_invocation("Use the API-Agent to add JWT login")
        assert target == "api-agent"
        assert request == "add JWT login"

    def test_use_the_without_to_is_plain(self) -> None:
        assert parse_invocation("use the force") == (None, "use the force")


def test_names_responsibility() -> None:
    assert names_responsibility("qa-agent")
    assert names_responsibility("Web-Agent ")
    assert not names_responsibility("api")


def test_normalize_request_keeps_case() -> None:
    assert normalize_request("Add\tA\n Page") == "Add A Page"
