"""Shared pytest fixtures and test helpers for archctl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from archctl.config.settings import ArchSettings
from archctl.infrastructure.workspace import Workspace
from archctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep host env vars and leaked telemetry state out of every test."""
    monkeypatch.delenv("ARCHCTL_CONFIG", raising=False)
    monkeypatch.delenv("ARCHCTL_ROUTING__ON_NO_MATCH", raising=False)
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory with an empty ``.archctl/`` folder.

    This is the single source of truth for the project layout; the
    workspace and ``_isolated_project`` fixtures build on it.
    """
    (tmp_path / ".archctl").mkdir()
    return tmp_path


@pytest.fixture
def workspace(project_root: Path) -> Workspace:
    """Workspace over the packaged catalog, plugins disabled."""
    settings = ArchSettings.from_cli(project_root=project_root, no_plugins=True)
    return Workspace(settings)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI resolves an isolated workspace.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_catalog(root: Path, data: dict[str, Any] | str) -> Path:
    """Write ``.archctl/catalog.yaml`` under *root* and return its path."""
    from ruamel.yaml import YAML

    path = root / ".archctl" / "catalog.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        with path.open("w", encoding="utf-8") as fh:
            YAML(typ="safe", pure=True).dump(data, fh)
    return path


def make_workspace(root: Path, **flags: Any) -> Workspace:
    """Fresh Workspace for *root*; plugins off unless asked for."""
    flags.setdefault("no_plugins", True)
    return Workspace(ArchSettings.from_cli(project_root=root, **flags))


def minimal_catalog(**overrides: Any) -> dict[str, Any]:
    """Two-layer catalog used by tests that need a custom rule table."""
    data: dict[str, Any] = {
        "responsibilities": [
            {
                "name": "domain-agent",
                "layer": "domain",
                "description": "Entities.",
                "skills": ["entities"],
            },
            {
                "name": "api-agent",
                "layer": "api",
                "description": "Endpoints.",
                "skills": [],
            },
        ],
        "skills": [
            {"name": "entities", "title": "Entities", "body": "# Entities\n"},
        ],
        "rules": [
            {"name": "model", "layers": ["domain"], "triggers": ["entity"]},
            {"name": "http", "layers": ["api"], "triggers": ["endpoint"]},
        ],
    }
    data.update(overrides)
    return data
