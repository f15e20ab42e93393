"""Tests for Workspace catalog caching and plugin rule merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from archctl.infrastructure.catalog_store import CatalogError
from archctl.infrastructure.workspace import Workspace
from archctl.plugins import hookimpl
from tests.conftest import make_workspace, minimal_catalog, write_catalog


class _RulePlugin:
    @hookimpl
    def register_routing_rules(self) -> list[dict[str, object]]:
        return [{"name": "reports", "layers": ["web"], "triggers": ["report"]}]


class _ClashingPlugin:
    @hookimpl
    def register_routing_rules(self) -> list[dict[str, object]]:
        return [{"name": "use-cases", "layers": ["web"], "triggers": ["report"]}]


class TestWorkspace:
    def test_root(self, workspace: Workspace, project_root: Path) -> None:
        assert workspace.root == project_root

    def test_catalog_is_cached(self, workspace: Workspace) -> None:
        assert workspace.catalog is workspace.catalog

    def test_plugins_none_until_init(self, workspace: Workspace) -> None:
        assert workspace.plugins is None

    def test_invalid_catalog_raises(self, project_root: Path) -> None:
        write_catalog(project_root, "- not a mapping\n")
        ws = make_workspace(project_root)
        with pytest.raises(CatalogError):
            _ = ws.catalog

    def test_catalog_path_setting(self, project_root: Path) -> None:
        custom = project_root / "routing.yaml"
        custom.write_text("{}\n", encoding="utf-8")
        (project_root / "archctl.toml").write_text(
            '[catalog]\npath = "routing.yaml"\n', encoding="utf-8"
        )
        ws = make_workspace(project_root)
        assert ws.catalog.responsibilities == ()


class TestPluginRules:
    def test_init_plugins_creates_manager(self, project_root: Path) -> None:
        ws = make_workspace(project_root, no_plugins=False)
        ws.init_plugins()
        assert ws.plugins is not None
        assert ws.plugins.is_loaded

    def test_plugin_rules_merged(self, project_root: Path) -> None:
        ws = make_workspace(project_root, no_plugins=False)
        ws.init_plugins()
        assert ws.plugins is not None
        ws.plugins.register_plugin(_RulePlugin())
        names = [r.name for r in ws.catalog.rules]
        assert names[-1] == "reports"
        assert ws.plugin_warnings == []

    def test_clashing_plugin_rules_ignored(self, project_root: Path) -> None:
        ws = make_workspace(project_root, no_plugins=False)
        ws.init_plugins()
        assert ws.plugins is not None
        ws.plugins.register_plugin(_ClashingPlugin())
        names = [r.name for r in ws.catalog.rules]
        assert "reports" not in names
        assert names.count("use-cases") == 1
        assert any("Ignored plugin routing rules" in w for w in ws.plugin_warnings)

    def test_plugin_warnings_is_a_copy(self, project_root: Path) -> None:
        write_catalog(project_root, minimal_catalog())
        ws = make_workspace(project_root)
        ws.plugin_warnings.append("mutated")
        assert ws.plugin_warnings == []
