"""InitService — scaffold archctl configuration in a project directory."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

from archctl.config.discovery import CONFIG_FILENAME
from archctl.infrastructure.catalog_store import (
    CATALOG_FILENAME,
    PROJECT_DIR,
    SKILLS_DIRNAME,
    packaged_catalog,
)
from archctl.services.result import ServiceResult
from archctl.services.telemetry import traced

_CONFIG_TEMPLATE = """\
# archctl configuration. Only overrides belong here; defaults are built in.

[routing]
# "error" rejects requests that match no category; "fallback" plans
# fallback_layers instead and attaches a warning.
on_no_match = "error"
include_skills = true
"""


class InitService:
    """Write ``archctl.toml`` and, optionally, an editable catalog copy."""

    @staticmethod
    @traced
    def init_project(
        root: Path,
        *,
        with_catalog: bool = False,
        force: bool = False,
    ) -> ServiceResult:
        """Scaffold archctl files under *root*.

        Refuses to overwrite existing files unless *force* is set.
        """
        op = "init_project"
        root = root.resolve()
        config_path = root / CONFIG_FILENAME
        catalog_path = root / PROJECT_DIR / CATALOG_FILENAME

        targets = [config_path, catalog_path] if with_catalog else [config_path]
        existing = [p for p in targets if p.exists()]
        if existing and not force:
            return ServiceResult.failure(
                op,
                "ALREADY_EXISTS",
                f"{existing[0].name} already exists (use --force to overwrite)",
                paths=[str(p) for p in existing],
            )

        created: list[str] = []
        config_path.write_text(_CONFIG_TEMPLATE, encoding="utf-8")
        created.append(str(config_path))

        if with_catalog:
            catalog_path.parent.mkdir(parents=True, exist_ok=True)
            catalog_text = packaged_catalog().read_text(encoding="utf-8")
            catalog_path.write_text(catalog_text, encoding="utf-8")
            created.append(str(catalog_path))

            skills_dir = catalog_path.parent / SKILLS_DIRNAME
            skills_dir.mkdir(exist_ok=True)
            packaged = resources.files("archctl").joinpath(f"data/{SKILLS_DIRNAME}")
            for entry in sorted(packaged.iterdir(), key=lambda e: e.name):
                if not entry.name.endswith(".md"):
                    continue
                target = skills_dir / entry.name
                if target.exists() and not force:
                    continue
                target.write_text(entry.read_text(encoding="utf-8"), encoding="utf-8")
                created.append(str(target))

        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(root), "created": created, "count": len(created)},
        )
