"""Tests for YAML catalog loading and project overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from archctl.domain.types import Layer
from archctl.infrastructure.catalog_store import (
    CatalogError,
    build_catalog,
    load_catalog,
    packaged_catalog,
    resolve_catalog_path,
)
from tests.conftest import minimal_catalog, write_catalog


class TestPackagedCatalog:
    def test_packaged_file_exists(self) -> None:
        assert packaged_catalog().is_file()

    def test_loads_default_responsibilities(self, tmp_path: Path) -> None:
        catalog = load_catalog(tmp_path)
        names = [r.name for r in catalog.responsibilities]
        assert names == [
            "domain-agent",
            "application-agent",
            "infrastructure-agent",
            "api-agent",
            "web-agent",
            "mcp-agent",
        ]

    def test_every_layer_covered(self, tmp_path: Path) -> None:
        catalog = load_catalog(tmp_path)
        for layer in Layer:
            assert catalog.for_layer(layer), layer

    def test_skill_bodies_loaded(self, tmp_path: Path) -> None:
        catalog = load_catalog(tmp_path)
        for doc in catalog.skills:
            assert doc.body.strip(), doc.name


class TestResolveCatalogPath:
    def test_none_without_project_catalog(self, tmp_path: Path) -> None:
        assert resolve_catalog_path(tmp_path) is None

    def test_project_catalog(self, project_root: Path) -> None:
        path = write_catalog(project_root, minimal_catalog())
        assert resolve_catalog_path(project_root) == path

    def test_relative_override(self, tmp_path: Path) -> None:
        (tmp_path / "routing.yaml").write_text("{}\n", encoding="utf-8")
        assert resolve_catalog_path(tmp_path, "routing.yaml") == tmp_path / "routing.yaml"

    def test_missing_override_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError, match="not found"):
            resolve_catalog_path(tmp_path, "missing.yaml")


class TestProjectCatalog:
    def test_project_catalog_replaces_default(self, project_root: Path) -> None:
        write_catalog(project_root, minimal_catalog())
        catalog = load_catalog(project_root)
        assert [r.name for r in catalog.responsibilities] == ["domain-agent", "api-agent"]
        assert catalog.skill("entities").body == "# Entities\n"  # type: ignore[union-attr]

    def test_body_from_project_skills_dir(self, project_root: Path) -> None:
        data = minimal_catalog(skills=[{"name": "entities", "title": "Entities"}])
        write_catalog(project_root, data)
        skills_dir = project_root / ".archctl" / "skills"
        skills_dir.mkdir()
        (skills_dir / "entities.md").write_text("local body\n", encoding="utf-8")
        catalog = load_catalog(project_root)
        assert catalog.skill("entities").body == "local body\n"  # type: ignore[union-attr]

    def test_body_falls_back_to_packaged(self, project_root: Path) -> None:
        data = minimal_catalog(skills=[{"name": "cqrs-handlers", "title": "CQRS"}])
        data["responsibilities"][0]["skills"] = ["cqrs-handlers"]
        write_catalog(project_root, data)
        doc = load_catalog(project_root).skill("cqrs-handlers")
        assert doc is not None
        assert doc.body.strip()

    def test_missing_body_is_empty(self, project_root: Path) -> None:
        data = minimal_catalog(skills=[{"name": "nowhere", "title": "Nowhere"}])
        write_catalog(project_root, data)
        assert load_catalog(project_root).skill("nowhere").body == ""  # type: ignore[union-attr]

    def test_empty_file_is_empty_catalog(self, project_root: Path) -> None:
        write_catalog(project_root, "")
        catalog = load_catalog(project_root)
        assert catalog.responsibilities == ()
        assert catalog.rules == ()


class TestInvalidCatalog:
    def test_invalid_yaml(self, project_root: Path) -> None:
        write_catalog(project_root, "responsibilities: [unclosed\n")
        with pytest.raises(CatalogError, match="Invalid YAML") as exc_info:
            load_catalog(project_root)
        assert exc_info.value.source is not None
        assert exc_info.value.source.endswith("catalog.yaml")

    def test_not_a_mapping(self, project_root: Path) -> None:
        write_catalog(project_root, "- a\n- b\n")
        with pytest.raises(CatalogError, match="must be a mapping"):
            load_catalog(project_root)

    def test_unknown_layer(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["responsibilities"][0]["layer"] = "database"
        write_catalog(project_root, data)
        with pytest.raises(CatalogError, match="Invalid catalog"):
            load_catalog(project_root)

    def test_duplicate_names(self, project_root: Path) -> None:
        data = minimal_catalog()
        data["responsibilities"].append(dict(data["responsibilities"][0]))
        write_catalog(project_root, data)
        with pytest.raises(CatalogError, match="duplicate responsibility names"):
            load_catalog(project_root)

    def test_duplicate_names_differing_in_case(self, project_root: Path) -> None:
        data = minimal_catalog()
        clone = dict(data["responsibilities"][0], name="Domain-Agent")
        data["responsibilities"].append(clone)
        write_catalog(project_root, data)
        with pytest.raises(CatalogError, match="duplicate responsibility names"):
            load_catalog(project_root)

    def test_build_catalog_wraps_type_errors(self) -> None:
        with pytest.raises(CatalogError):
            build_catalog({"skills": [42]}, body_search=[], source="inline")

    def test_non_utf8_catalog(self, project_root: Path) -> None:
        path = project_root / ".archctl" / "catalog.yaml"
        path.write_bytes(b"rules: []\n# \xff\n")
        with pytest.raises(CatalogError, match="Cannot read") as exc_info:
            load_catalog(project_root)
        assert exc_info.value.source == str(path)

    def test_non_utf8_skill_body(self, project_root: Path) -> None:
        write_catalog(project_root, minimal_catalog(skills=[{"name": "entities", "title": "E"}]))
        skills_dir = project_root / ".archctl" / "skills"
        skills_dir.mkdir()
        (skills_dir / "entities.md").write_bytes(b"\xff\xfe body")
        with pytest.raises(CatalogError, match="Cannot read skill body"):
            load_catalog(project_root)
