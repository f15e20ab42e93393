"""Tests for CheckService catalog content checks."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from archctl.infrastructure.workspace import Workspace
from archctl.services.check import CheckService
from tests.conftest import make_workspace, minimal_catalog, write_catalog


def _run(root: Path, data: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
    write_catalog(root, data)
    result = CheckService(make_workspace(root)).check(**kwargs)
    assert result.ok
    return result.data


def _messages(data: dict[str, Any]) -> list[tuple[str, str, str]]:
    return [(i["severity"], i["subject"], i["message"]) for i in data["issues"]]


class TestDefaultCatalog:
    def test_packaged_catalog_is_clean(self, workspace: Workspace) -> None:
        result = CheckService(workspace).check()
        assert result.ok
        assert result.data["count"] == 0
        assert result.data["healthy"] is True


class TestResponsibilityChecks:
    def test_empty_description(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["responsibilities"][0]["description"] = "  "
        out = _run(project_root, data)
        assert ("error", "domain-agent", "Description is empty") in _messages(out)
        assert out["healthy"] is False

    def test_unknown_skill(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["responsibilities"][1]["skills"] = ["ghost"]
        out = _run(project_root, data)
        assert ("error", "api-agent", "References unknown skill 'ghost'") in _messages(out)

    def test_skill_reference_ignores_case(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["responsibilities"][0]["skills"] = ["Entities"]
        out = _run(project_root, data)
        assert out["count"] == 0


class TestSkillChecks:
    def test_unbound_and_empty(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["skills"].append({"name": "orphan", "title": "Orphan"})
        out = _run(project_root, data)
        messages = _messages(out)
        assert ("warning", "orphan", "Not bound to any responsibility") in messages
        assert ("warning", "orphan", "Body is empty") in messages
        assert out["healthy"] is True


class TestRuleChecks:
    def test_rule_without_triggers(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["rules"].append({"name": "silent", "layers": ["domain"], "triggers": []})
        out = _run(project_root, data)
        assert ("error", "silent", "Has no triggers") in _messages(out)

    def test_rule_to_uncovered_layer(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["rules"].append({"name": "ui", "layers": ["web"], "triggers": ["page"]})
        out = _run(project_root, data)
        assert (
            "error",
            "ui",
            "Routes to layer 'web' but no responsibility covers it",
        ) in _messages(out)

    def test_unreachable_layer(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["rules"] = [data["rules"][0]]
        out = _run(project_root, data)
        assert (
            "warning",
            "api",
            "Layer has responsibilities but no routing rule reaches it",
        ) in _messages(out)

    def test_shared_trigger_different_layers(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["rules"][1]["triggers"] = ["endpoint", "entity"]
        out = _run(project_root, data)
        assert (
            "warning",
            "entity",
            "Trigger shared by rules selecting different layers: model, http",
        ) in _messages(out)

    def test_shared_trigger_same_layers_ok(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["rules"].append({"name": "model-2", "layers": ["domain"], "triggers": ["entity"]})
        out = _run(project_root, data)
        assert out["count"] == 0


class TestSeverityFilter:
    def test_errors_only(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["skills"].append({"name": "orphan", "title": "Orphan"})
        data["responsibilities"][0]["description"] = ""
        out = _run(project_root, data, min_severity="error")
        assert out["warning_count"] == 0
        assert out["error_count"] == 1
        assert out["count"] == 1


class TestInvalidCatalog:
    def test_failure(self, project_root: Path) -> None:
        write_catalog(project_root, "- nope\n")
        result = CheckService(make_workspace(project_root)).check()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_CATALOG"
