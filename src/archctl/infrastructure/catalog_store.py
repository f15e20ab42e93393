"""YAML-backed catalog loading with per-project overrides.

Resolution order for the catalog file:

1. ``[catalog] path`` from settings (relative to the workspace root).
2. ``.archctl/catalog.yaml`` inside the workspace.
3. The packaged default (``archctl/data/catalog.yaml``).

Skill bodies are read from ``.archctl/skills/<name>.md`` first, then from
``skills/`` next to the catalog file, then from the packaged defaults.
"""

from __future__ import annotations

import logging
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from archctl.domain.catalog import Catalog, KnowledgeDocument, Responsibility, RoutingRule

logger = logging.getLogger(__name__)

PROJECT_DIR = ".archctl"
CATALOG_FILENAME = "catalog.yaml"
SKILLS_DIRNAME = "skills"


class CatalogError(ValueError):
    """Raised when catalog data cannot be read or fails validation."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


def packaged_catalog() -> Traversable:
    """Return the packaged default catalog file."""
    return resources.files("archctl").joinpath(f"data/{CATALOG_FILENAME}")


def resolve_catalog_path(root: Path, override: str | None = None) -> Path | None:
    """Find the project catalog file, or None to use the packaged default."""
    if override:
        candidate = Path(override)
        if not candidate.is_absolute():
            candidate = root / candidate
        if not candidate.is_file():
            raise CatalogError(f"Catalog file not found: {candidate}", source=str(candidate))
        return candidate

    candidate = root / PROJECT_DIR / CATALOG_FILENAME
    return candidate if candidate.is_file() else None


def _read_yaml(text: str, source: str) -> dict[str, Any]:
    try:
        data = YAML(typ="safe").load(text)
    except YAMLError as exc:
        raise CatalogError(f"Invalid YAML in {source}: {exc}", source=source) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog {source} must be a mapping", source=source)
    return data


def _read_body(name: str, search: list[Path | Traversable]) -> str:
    for base in search:
        candidate = base.joinpath(f"{name}.md")
        if not candidate.is_file():
            continue
        try:
            return candidate.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read skill body {candidate}: {exc}"
            raise CatalogError(msg, source=str(candidate)) from exc
    return ""


def build_catalog(
    data: dict[str, Any],
    *,
    body_search: list[Path | Traversable],
    source: str,
) -> Catalog:
    """Validate raw catalog *data* into a :class:`Catalog`."""
    try:
        responsibilities = [
            Responsibility.model_validate(r) for r in data.get("responsibilities") or []
        ]
        rules = [RoutingRule.model_validate(r) for r in data.get("rules") or []]
        skills: list[KnowledgeDocument] = []
        for raw in data.get("skills") or []:
            entry = dict(raw)
            if not entry.get("body"):
                entry["body"] = _read_body(str(entry.get("name", "")), body_search)
            skills.append(KnowledgeDocument.model_validate(entry))
        return Catalog(
            responsibilities=tuple(responsibilities),
            skills=tuple(skills),
            rules=tuple(rules),
        )
    except CatalogError:
        raise
    except (ValidationError, ValueError, TypeError) as exc:
        raise CatalogError(f"Invalid catalog {source}: {exc}", source=source) from exc


def load_catalog(root: Path, *, override: str | None = None) -> Catalog:
    """Load the catalog for the workspace at *root*."""
    path = resolve_catalog_path(root, override)
    project_skills = root / PROJECT_DIR / SKILLS_DIRNAME
    packaged_skills = resources.files("archctl").joinpath(f"data/{SKILLS_DIRNAME}")

    if path is None:
        source = "<packaged>"
        text = packaged_catalog().read_text(encoding="utf-8")
        search: list[Path | Traversable] = [project_skills, packaged_skills]
    else:
        source = str(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CatalogError(f"Cannot read {path}: {exc}", source=source) from exc
        search = [project_skills, path.parent / SKILLS_DIRNAME, packaged_skills]

    catalog = build_catalog(_read_yaml(text, source), body_search=search, source=source)
    logger.debug(
        "Loaded catalog from %s (%d responsibilities, %d skills, %d rules)",
        source,
        len(catalog.responsibilities),
        len(catalog.skills),
        len(catalog.rules),
    )
    return catalog
