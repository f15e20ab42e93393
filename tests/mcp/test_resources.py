"""Tests for MCP resource and prompt _impl functions."""

from __future__ import annotations

from pathlib import Path

from archctl.infrastructure.workspace import Workspace
from archctl.mcp.prompts import orchestrator_impl
from archctl.mcp.resources import catalog_impl, skill_impl
from tests.conftest import make_workspace, write_catalog


class TestCatalogResource:
    def test_lists_everything(self, workspace: Workspace) -> None:
        data = catalog_impl(workspace)
        assert len(data["responsibilities"]) == 6
        assert len(data["skills"]) == 10
        rules = {r["name"]: r for r in data["rules"]}
        assert rules["full-feature"]["layers"] == [
            "domain",
            "application",
            "infrastructure",
            "api",
        ]

    def test_invalid_catalog(self, project_root: Path) -> None:
        write_catalog(project_root, "- nope\n")
        data = catalog_impl(make_workspace(project_root))
        assert "must be a mapping" in data["error"]


class TestSkillResource:
    def test_body(self, workspace: Workspace) -> None:
        assert skill_impl(workspace, "repository-pattern").strip()

    def test_missing(self, workspace: Workspace) -> None:
        assert skill_impl(workspace, "nope").startswith("Skill not found")


class TestOrchestratorPrompt:
    def test_renders_steps_in_order(self, workspace: Workspace) -> None:
        text = orchestrator_impl(workspace, "Add an Order entity and expose it via MCP")
        assert text.startswith("## Orchestrate: Add an Order entity and expose it via MCP")
        assert "1. Use the domain-agent to" in text
        assert "2. Use the mcp-agent to" in text
        assert "(independent)" in text

    def test_no_plan(self, workspace: Workspace) -> None:
        text = orchestrator_impl(workspace, "make it nicer")
        assert "No plan could be built" in text
